"""
v1 API 端点
"""
