"""
Path-Cleaner 公共基础设施：配置、异常、枚举和工具函数
"""
