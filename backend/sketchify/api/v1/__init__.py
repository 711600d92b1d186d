"""
v1 版本 API
"""
