#!/usr/bin/env python
# License: BSD 3 clause
from setuptools import find_packages, setup

# Get version without importing, which avoids dependency issues
exec(compile(open('arfftools/version.py').read(), 'arfftools/version.py', 'exec'))


def readme():
    with open('README.rst') as f:
        return f.read()


def requirements():
    req_path = 'requirements.txt'
    with open(req_path) as f:
        reqs = f.read().splitlines()
    return reqs


setup(name='arfftools',
      version=__version__,  # noqa: F821
      description=('Streaming reader and writer for ARFF files, with '
                   'conversion to and from pandas data frames.'),
      long_description=readme(),
      keywords='arff weka machine-learning data-format',
      license='BSD 3 clause',
      packages=find_packages(exclude=['tests', 'tests.*']),
      entry_points={'console_scripts':
                    ['arff_convert = arfftools.utils.commandline.arff_convert:main',
                     'print_arff_header = arfftools.utils.commandline.print_arff_header:main']},
      install_requires=requirements(),
      extras_require={'test': ['pytest']},
      python_requires='>=3.8',
      classifiers=['Intended Audience :: Science/Research',
                   'Intended Audience :: Developers',
                   'License :: OSI Approved :: BSD License',
                   'Programming Language :: Python',
                   'Topic :: Software Development',
                   'Topic :: Scientific/Engineering',
                   'Operating System :: Microsoft :: Windows',
                   'Operating System :: POSIX',
                   'Operating System :: Unix',
                   'Operating System :: MacOS',
                   'Programming Language :: Python :: 3',
                   'Programming Language :: Python :: 3.8',
                   'Programming Language :: Python :: 3.9',
                   'Programming Language :: Python :: 3.10',
                   ],
      zip_safe=False)
