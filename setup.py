from setuptools import setup

setup(
    name="extension-store-verifier",
    version="0.1.0",
    description="Chrome Web Store compliance verifier for packaged browser extensions",
    package_dir={"": "src"},
    py_modules=[
        "analyzer",
        "exceptions",
        "manifest_parser",
        "models",
        "policy_checks",
        "script_scanner",
        "settings",
        "unpacker",
        "utils",
        "verifier",
    ],
    install_requires=[
        "pydantic>=2.0",
        "fastapi>=0.109.0",
        "uvicorn>=0.27.0",
        "python-multipart>=0.0.6",
        "tqdm>=4.66.1",
        "colorama>=0.4.6",
        "python-dotenv>=1.0.0",
        "jinja2>=3.1.2",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "httpx>=0.25",
        ],
    },
    entry_points={
        "console_scripts": [
            "extension-verifier=analyzer:main",
        ],
    },
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Security",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.9",
    ],
)
