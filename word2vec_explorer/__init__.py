from .client import WordRelationClient
from .models import RelatedWord, RelatedWordSet
from .normalize import normalize
from .prompts import build_prompt

__all__ = [
    "WordRelationClient",
    "RelatedWord",
    "RelatedWordSet",
    "normalize",
    "build_prompt",
]
