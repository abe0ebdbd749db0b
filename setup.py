#!/usr/bin/env python
from setuptools import setup, find_packages

with open('./README.md', encoding='utf-8') as f:
    long_description = f.read()

setup(name='update-batching',
      version="1.0.0",
      python_requires='>=3.9',
      classifiers = [
          'Development Status :: 4 - Beta',
          'Environment :: Console',
          'License :: OSI Approved :: GNU Lesser General Public License v2 or later (LGPLv2+)',
          'Programming Language :: Python',
          'Programming Language :: Python :: 3',
          'Operating System :: OS Independent',
          'Intended Audience :: Developers',
          'Topic :: Database',
          'Topic :: System :: Benchmark'
      ],
      description='Micro-benchmark of batched UPDATE strategies against MariaDB/MySQL',
      long_description=long_description,
      long_description_content_type='text/markdown',
      license='LGPL 2.1',
      packages=find_packages(exclude=["testing*"]),
      install_requires=[
          'mysql-connector-python>=9.2',
      ],
      extras_require={
          'bench': ['pyperf'],
          'test': ['pytest'],
      },
      entry_points={
          'console_scripts': [
              'update-batching=update_batching.__main__:main',
          ],
      }
)
