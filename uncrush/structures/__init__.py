from .base import Structure
from .options import StructureOptions
