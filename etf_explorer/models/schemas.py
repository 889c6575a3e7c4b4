from enum import Enum
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _number_to_str(value: Any) -> Any:
    # The model sometimes emits bare numbers or null where the contract says string.
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


LooseStr = Annotated[str, BeforeValidator(_number_to_str)]


class AnalysisMode(str, Enum):
    GROUNDED = "grounded"
    SCHEMA = "schema"


class ImageSize(str, Enum):
    ONE_K = "1K"
    TWO_K = "2K"
    FOUR_K = "4K"


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class _WireModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Performance(_WireModel):
    ytd: LooseStr
    three_month: LooseStr
    six_month: LooseStr
    one_year: LooseStr


class Holding(_WireModel):
    name: str
    percentage: LooseStr


class Alternative(_WireModel):
    ticker: str
    price: LooseStr


class ETFData(_WireModel):
    ticker: str
    summary: str
    sector: str
    current_price: LooseStr
    performance: Performance
    holdings: List[Holding]
    alternatives: List[Alternative]


class AnalysisRequest(BaseModel):
    ticker: str

    @field_validator("ticker")
    @classmethod
    def _normalize_ticker(cls, value: str) -> str:
        value = value.strip().upper()
        if not value:
            raise ValueError("ticker must not be empty")
        return value


class AnalyzeRequest(BaseModel):
    ticker: str = Field("", description="ETF ticker symbol. Blank picks a popular ETF at random.")


class PerformanceTile(BaseModel):
    label: str
    value: str
    positive: bool


class ChartPoint(BaseModel):
    name: str
    value: float
    positive: bool


class ETFDisplay(_WireModel):
    current_price: str
    performance: List[PerformanceTile]
    chart: List[ChartPoint]
    holdings: List[Holding]
    alternatives: List[Alternative]


class AnalysisResponse(BaseModel):
    ticker: str
    data: ETFData
    display: ETFDisplay


class VisualRequest(BaseModel):
    prompt: str = Field(..., min_length=1, description="Text to visualize, usually the ETF summary.")
    size: ImageSize = ImageSize.ONE_K


class VisualResponse(BaseModel):
    image: Optional[str] = Field(None, description="data:image/png;base64 URI, or null if nothing was produced.")


class ChatMessage(BaseModel):
    role: ChatRole
    content: str


class ChatRequest(BaseModel):
    message: str = Field(..., description="The user's new chat message.")
    history: List[ChatMessage] = Field(default_factory=list, description="Transcript so far, oldest first.")
