import os

from setuptools import setup


base_dir = os.path.dirname(__file__)
about = {}
with open(os.path.join(base_dir, "uncrush", "__init__.py")) as f:
    for line in f:
        if line.startswith("__version__"):
            exec(line, about)

try:
    long_description = open("README.rst", "r").read()
except Exception:
    long_description = None


setup(
    name='uncrush',
    version=about['__version__'],
    packages=['uncrush',
              'uncrush.fields',
              'uncrush.parsing',
              'uncrush.structures'],
    entry_points={
        'console_scripts': ['uncrush = uncrush.__main__:main'],
    },
    python_requires='>=3.6',
    test_suite='tests',
    license='MIT',
    description='Converts crushed iOS PNG files (CgBI) back into standard PNG files',
    long_description=long_description,
    keywords=['png', 'cgbi', 'ios', 'pngcrush'],
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Topic :: Multimedia :: Graphics :: Graphics Conversion',
        'Topic :: Software Development :: Libraries :: Python Modules',
    ],
)
