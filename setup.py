from setuptools import setup, find_packages

setup(
    name="rsqlcmd",
    version="0.1.0",
    packages=find_packages(include=["rsqlcmd", "rsqlcmd.*"]),
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=[
        'click>=8.1.8',
        'psycopg2-binary>=2.9.10',
        'rich>=13.9.4',
        'trino>=0.333.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'rsqlcmd=rsqlcmd.main:main',
        ],
    },
)
