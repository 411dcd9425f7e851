from setuptools import setup, find_packages

setup(
    name='rotalgebra',
    version='1.0.0',
    description='A rotation algebra over axis-angles, quaternions, rotation matrices, and yaw-pitch-roll angles',
    packages=find_packages(include=['rotalgebra', 'rotalgebra.*']),
    python_requires='>=3.11',
    install_requires=['numpy', 'pandas'],
    extras_require={'test': ['pytest', 'scipy']},
)
