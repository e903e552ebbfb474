from setuptools import setup, find_packages

setup(
    name="quantum_resistant_vpn",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "cryptography>=44.0.2",
        "liboqs-python>=0.10.0",
        "pyyaml>=6.0.2",
        "python-dotenv>=1.0.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
        ],
    },
    entry_points={
        "console_scripts": [
            "quantum-resistant-vpn=quantum_resistant_vpn.__main__:main",
        ],
    },
    description="Classic, post-quantum and hybrid encryption engine for a VPN management tool",
    keywords="vpn, post-quantum, cryptography, ml-kem, aead",
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
    ],
)
