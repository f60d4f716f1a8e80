"""Settings models and built-in defaults."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_API_URL = "https://api.openai.com/v1/chat/completions"
DEFAULT_MODEL_NAME = "gpt-4"

DEFAULT_SYSTEM_PROMPT = """You are an AI assistant that answers user questions by calling tools.
你是一个AI助手，仅通过工具调用响应用户查询。

## Tool rules / 工具调用规则
- When a person's name appears, call get_character_info immediately.
  检测到人物名称时，立即调用get_character_info工具
- Do not add any preamble before the tool call.
  禁止前置语义化回复
- Answer only with information returned by the tool.
  直接返回工具查询结果

## Available tools / 可用工具
get_character_info: look up a person / 查询人物信息
Parameter / 参数: name (person name / 人物姓名)
Available people / 可用人物: 张三、李四、王五、赵六、孙七

## Response format / 响应格式
Return only the tool result, without explanatory text.
仅返回工具查询结果，不添加解释性文字。

## Example / 示例调用
User / 用户: "张三"
AI: {"name":"get_character_info","arguments":{"name":"张三"}}"""


class PromptSlot(str, Enum):
    """The two prompts being compared."""

    A = "A"
    B = "B"

    @property
    def storage_key(self) -> str:
        """Key of this prompt in the settings store."""
        return f"systemPrompt{self.value}"


class ModelSettings(BaseModel):
    """Connection and sampling settings for the completion endpoint.

    Field aliases match the stored JSON keys.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    api_url: str = Field(default=DEFAULT_API_URL, alias="apiUrl")
    api_key: str = Field(default="", alias="apiKey")
    model_name: str = Field(default=DEFAULT_MODEL_NAME, alias="modelName")
    top_p: float = Field(default=0.9, ge=0.0, le=1.0, alias="topP")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)

    @property
    def has_api_key(self) -> bool:
        """Whether a non-blank API key is configured."""
        return bool(self.api_key and self.api_key.strip())

    def masked_api_key(self) -> str:
        """API key with all but the last four characters hidden."""
        if not self.has_api_key:
            return ""
        key = self.api_key.strip()
        return "*" * max(len(key) - 4, 0) + key[-4:]

    def to_storage(self) -> dict:
        """Serialize with the stored JSON key names."""
        return self.model_dump(by_alias=True)
