# setup.py
from setuptools import setup, find_packages

setup(
    name="font_scout",
    version="0.1.0",
    description="Проверка сайта на загрузку Google Fonts (FontScout)",
    packages=find_packages(exclude=["tests", "tests.*"]),  # автоматически найдёт папку font_scout
    package_data={"font_scout": ["templates/*.j2"]},
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "click>=8.1",
        "Jinja2>=3.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "font-scout=font_scout.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
