"""counter-bridge 内置资源（默认配置等）。"""
