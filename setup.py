# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="bitlog",
    version="0.1.0",
    description="Leveled logging to stdout or a single size-bounded, self-truncating file",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    python_requires=">=3.8",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["bitlog", "bitlog.*"]),
    install_requires=[],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        'console_scripts': [
            'bitlog-demo=bitlog.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
