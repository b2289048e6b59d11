'''
layoutfeat installation
'''

from setuptools import setup, find_packages

setup(name="layoutfeat",
      version="0.1",
      description="per-token layout features for formatting code by example",
      packages=find_packages(exclude=["scripts",
                                      "tests"]),
      scripts=["scripts/layoutfeat"],
      python_requires=">=3.6",
      install_requires=['joblib',
                        'numpy',
                        'scikit-learn',
                        'tabulate'],
      extras_require={'test': ['pytest']})
