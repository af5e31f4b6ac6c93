from setuptools import find_packages, setup
import os
from glob import glob

package_name = 'frontier_exploration'

setup(
    name=package_name,
    version='1.0.0',
    packages=find_packages(exclude=['test']),
    data_files=[
        # Example parameter files
        (os.path.join('share', package_name, 'config'), glob('config/*.yaml')),
    ],
    install_requires=[
        'setuptools',
        'numpy',
        'scipy',
        'PyYAML',
    ],
    zip_safe=True,
    maintainer='Drobot Team',
    maintainer_email='drobot@example.com',
    description='Frontier ranking and selection for frontier-based exploration',
    license='MIT',
    extras_require={
        'test': ['pytest'],
    },
)
