from .base import Field
from .common import BytesField, StringField, IntegerField, MagicField
from .wrapped import EnumField, PseudoMemberEnumMixin
