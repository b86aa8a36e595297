from .summary import (
    EMPTY_SUMMARY,
    MissingCredentialsError,
    build_chat_model,
    build_summary_prompt,
    generate_summary_with_llm,
)

__all__ = [
    "EMPTY_SUMMARY",
    "MissingCredentialsError",
    "build_chat_model",
    "build_summary_prompt",
    "generate_summary_with_llm",
]
