"""scratchmsm: Markov state models of discrete trajectories
"""

DOCLINES = __doc__.split("\n")

from setuptools import setup, find_packages

# #########################
VERSION = '0.1.0'
ISRELEASED = True
__version__ = VERSION
# #########################

CLASSIFIERS = """\
Intended Audience :: Science/Research
Intended Audience :: Developers
License :: OSI Approved :: GNU Lesser General Public License v2 or later (LGPLv2+)
Programming Language :: Python
Programming Language :: Python :: 3
Development Status :: 3 - Alpha
Topic :: Scientific/Engineering
Operating System :: POSIX
Operating System :: Unix
Operating System :: MacOS
"""


def write_version_py(version, isreleased, filename):
    cnt = """
# THIS FILE IS GENERATED FROM SCRATCHMSM SETUP.PY
short_version = '%(version)s'
version = '%(version)s'
full_version = '%(full_version)s'
release = %(isrelease)s
"""
    with open(filename, 'w') as a:
        a.write(cnt.lstrip() % {'version': version,
                                'full_version': version,
                                'isrelease': str(isreleased)})


write_version_py(VERSION, ISRELEASED, filename='scratchmsm/version.py')
setup(name='scratchmsm',
      description=DOCLINES[0],
      long_description="\n".join(DOCLINES[2:]),
      version=__version__,
      platforms=['Linux', 'Mac OS-X', 'Unix'],
      classifiers=CLASSIFIERS.splitlines(),
      packages=find_packages(include=['scratchmsm', 'scratchmsm.*']),
      python_requires='>=3.8',
      install_requires=[
          'numpy',
          'scipy',
          'pandas',
          'scikit-learn',
          'joblib',
      ],
      extras_require={
          'test': ['pytest'],
      },
      zip_safe=False)
