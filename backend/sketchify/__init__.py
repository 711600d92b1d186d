"""
AI 素描生成后端
"""

__version__ = "1.0.0"
