"""
Path-Cleaner 安装配置
"""
from setuptools import setup, find_packages

setup(
    name="path-cleaner",
    version="1.0.0",
    description="带退避重试的测试输出路径清理工具（含 pytest 插件）",
    author="Path-Cleaner Team",
    author_email="",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "loguru>=0.7",
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
        "pytest>=7.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "path-cleaner=cleaner.main:main",
        ],
        "pytest11": [
            "file_cleaner=cleaner.plugin",
        ],
    },
)
