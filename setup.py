# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="mkfiletree",
    version="0.1.0",
    description="Materialize a declarative directory/file tree on disk in one call",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["mkfiletree*"]),
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        'console_scripts': [
            'mkfiletree=mkfiletree.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
