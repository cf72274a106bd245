"""
本地配置文件（可选）：你可以直接在这里填入 API Key 等配置。
代码会优先读取此文件中的值；如果为空，则回退到环境变量。

注意：此文件仅用于本地开发，请勿提交到公共仓库。
"""

# 模型服务：gemini（默认，带 Google 搜索引用）或 deepseek（OpenAI 兼容接口，无引用）
LLM_PROVIDER = ""

# Gemini：若留空，将回退到环境变量 GEMINI_API_KEY / API_KEY
GEMINI_API_KEY = ""
GEMINI_MODEL = ""
# 可选：请求超时（秒），留空则不设超时
GEMINI_TIMEOUT_SEC = ""

# DeepSeek：若留空，将回退到环境变量 DEEPSEEK_API_KEY 等
DEEPSEEK_API_KEY = ""
DEEPSEEK_MODEL = ""
DEEPSEEK_API_BASE = ""

# 日志级别：DEBUG / INFO / WARNING
LOG_LEVEL = ""
