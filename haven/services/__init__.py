"""服务层：CLI 共享的编排逻辑"""
