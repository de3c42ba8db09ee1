# setup.py

from setuptools import setup, find_packages

setup(
    name='eq-match-game',
    version='1.0.0',
    description='Scoring and response-curve core for the EQ Match ear-training game',
    package_dir={'': 'src'},
    packages=find_packages(where='src'),
    python_requires='>=3.8',
    install_requires=[
        'numpy',
        'matplotlib',
        'typer',
        'rich',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    entry_points={
        'console_scripts': [
            'eq-match=eq_match_game.cli.__main__:main',
        ],
    },
)
