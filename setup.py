from setuptools import setup, find_packages

setup(
    name='handlebar',
    version='1.0.0',
    packages=find_packages(where='src'),
    package_dir={'': 'src'},
    description='Handlebar: two-hand rotation of held objects from tracked hand or controller positions',
    install_requires=[
        'numpy',
        'scipy',
        'pyyaml',
    ],
    extras_require={
        'test': ['pytest'],
    },
    python_requires='>=3.8',
)
