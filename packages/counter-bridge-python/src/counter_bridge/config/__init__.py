"""配置（内置默认值 + YAML overlay + pydantic 校验）。"""
