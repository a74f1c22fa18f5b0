"""
VideoScan — setuptools build script.

Usage:
    # Development (editable install):
    pip install -e ".[test]"

    # Run:
    python main.py analyze https://www.youtube.com/watch?v=<id>

External tools expected on PATH: yt-dlp, ffmpeg.
Browser for screenshots: `playwright install chromium`.
"""

from setuptools import setup, find_namespace_packages

APP_NAME = "videoscan"

setup(
    name=APP_NAME,
    version="1.0.0",
    description="Detect AI-generated speech in YouTube videos",
    packages=find_namespace_packages(include=["videoscan", "videoscan.*"]),
    py_modules=["main"],
    install_requires=[
        "requests>=2.28.0",
        "playwright>=1.40",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.10",
    entry_points={
        "console_scripts": [
            "videoscan=main:main",
        ],
    },
)
