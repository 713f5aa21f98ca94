"""
painting_agent - 标题生成绘画创意与图片
"""
__version__ = "0.1.0"
