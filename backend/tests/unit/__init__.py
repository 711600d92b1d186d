"""
单元测试
"""
