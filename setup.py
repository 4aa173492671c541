from setuptools import find_packages, setup

setup(
    name='erc20-token-service',
    version='0.1.0',
    packages=find_packages(exclude=['tests', 'tests.*']),
    package_data={
        '': [
            '*.json',
        ],
    },
    python_requires='>=3.8',
    entry_points={
        'console_scripts': [
            'erc20-service=token_service.__main__:main',
        ],
    },
    install_requires=[
        'click',
        'eth-account',
        'eth-typing',
        'eth-utils',
        'flask',
        'flask-marshmallow',
        'jinja2',
        'marshmallow',
        'pluggy',
        'prometheus-client',
        'pyyaml',
        'requests',
        'structlog',
        'typing-extensions',
        'waitress',
        'web3>=7',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
)
