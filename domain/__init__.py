"""领域层：接口描述实体、跨文件校验与生成规划。"""
