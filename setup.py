import os

from setuptools import setup, find_packages


def _read_file(path: str) -> str:
    with open(path) as f:
        return f.read().strip()


# Versions
file_dir = os.path.dirname(os.path.realpath(__file__))
txchop_version = _read_file(os.path.join(file_dir, 'txchop', 'VERSION'))
packages = find_packages(include=['txchop', 'txchop.*'])


setup(
    # Metadata
    name='txchop',
    version=txchop_version,
    license='MIT',
    description='txchop statically analyzes the syntax trees of chaincode smart contracts for transaction chopping: '
                'it finds statements which are independent of preceding control flow together with the statements '
                'they derive their values from, and the function parameters which flow into ledger reads and writes.',

    # Dependencies
    python_requires='>=3.8,<4',
    install_requires=[
        'parameterized>=0.7',
        'appdirs>=1.4,<1.5',
        'argcomplete>=1',
        'semantic-version>=2.8.4,<3',
    ],

    # Contents
    packages=packages,
    include_package_data=True,
    package_data={
        'txchop': ['VERSION', 'examples/code/*.json'],
    },
    entry_points={
        "console_scripts": [
            "txchop=txchop.__main__:main"
        ]
    },
)
