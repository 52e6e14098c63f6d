from setuptools import setup, find_packages

setup(
    name='swissmeta',
    version='0.1',
    description='Standings and metagame statistics for Swiss card-game tournaments',
    packages=find_packages(exclude=['tests']),
    python_requires='>=3.8',

    package_data = {
        # Include the config file:
        'swissmeta': ['*.ini']
    },

    install_requires=[
        # Live tournament store
        'SQLAlchemy >=1.4',
        # Archive and catalog over HTTP
        'requests',
        # Tournament date normalization
        'python-dateutil',
        # Report charts
        'matplotlib',
    ],

    extras_require={
        'test': ['pytest'],
    },

    # Executable scripts
    entry_points={
        'console_scripts': [
            # swissmeta : standings, archive and deck lab reports, live entry
            'swissmeta = swissmeta.main:run',
        ],
        'gui_scripts': []  # None of these yet
    }
)
