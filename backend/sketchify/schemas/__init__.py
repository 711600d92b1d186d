"""
API 请求与响应数据模型
"""
