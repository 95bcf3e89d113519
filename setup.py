"""
Setup configuration for Pinyin Match.
"""

from setuptools import setup, find_packages

setup(
    name="pinyin-match",
    version="0.1.0",
    author="Pinyin Match Team",
    description="Pinyin to English matching game with a Mandarin text-to-speech proxy",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={
        "pinyin_match.web": ["static/*"],
    },
    include_package_data=True,
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
    ],
    python_requires=">=3.8",
    install_requires=[
        "flask>=2.2.0",
        "flask-cors>=3.0.0",
        "requests>=2.25.0",
    ],
    extras_require={
        "audio": [
            "pygame>=2.1.0",
            "pyttsx3>=2.90",
        ],
        "dev": [
            "pytest>=7.0.0",
            "hypothesis>=6.0.0",
            "black>=22.0.0",
            "flake8>=4.0.0",
            "mypy>=0.950",
        ],
    },
    entry_points={
        "console_scripts": [
            "pinyin-match=pinyin_match.web.run:main",
        ],
    },
)
