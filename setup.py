"""
xorscope Setup Configuration
Statistical cryptanalysis toolkit for XOR ciphers and ECB mode detection
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="xorscope",
    version="1.0.0",
    author="BearWatchDev",
    author_email="BearWatchDev@pm.me",
    description="Frequency-analysis XOR breaker and ECB detector",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    package_data={"xorscope.data": ["*.txt"]},
    include_package_data=True,
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Information Technology",
        "Topic :: Security :: Cryptography",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: POSIX :: Linux",
    ],
    python_requires=">=3.9",
    install_requires=[
        "pyyaml>=6.0",
        "rich>=13.0",
        "cryptography>=41.0",
    ],
    extras_require={
        "api": ["fastapi>=0.104.0", "uvicorn>=0.24.0"],
        "test": ["pytest>=7.0", "fastapi>=0.104.0", "httpx>=0.25.0"],
        "all": ["fastapi>=0.104.0", "uvicorn>=0.24.0"],
    },
    entry_points={
        "console_scripts": [
            "xorscope=xorscope.cli:main",
        ],
    },
)
