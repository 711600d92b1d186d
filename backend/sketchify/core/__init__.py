"""
核心模块：配置、日志与素描生成管线
"""
