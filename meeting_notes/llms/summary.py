from typing import Optional

from langchain_core.language_models import BaseChatModel
from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate
from langchain_core.runnables import Runnable
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_groq import ChatGroq
from langchain_ollama import ChatOllama
from loguru import logger

from ..settings import Settings

SYSTEM_PROMPT = (
    "You are an expert at summarizing meeting notes, transcripts, and documents. "
    "Provide clear, structured summaries that are easy to understand and actionable."
)
EMPTY_SUMMARY = "No summary generated"

prompt_template = ChatPromptTemplate.from_messages(
    [("system", SYSTEM_PROMPT), ("human", "{prompt}")]
)
parser = StrOutputParser()


class MissingCredentialsError(Exception):
    pass


def build_chat_model(settings: Settings) -> BaseChatModel:
    """Create the chat model for the configured provider.

    Raises MissingCredentialsError when a hosted provider has no API key.
    """
    llm_settings = settings.llm_settings
    logger.debug(f"using model provider {settings.llm_provider}")

    if settings.llm_provider == "groq":
        if not llm_settings.GROQ_API_KEY:
            raise MissingCredentialsError("GROQ_API_KEY is not set")
        return ChatGroq(
            model=llm_settings.groq_model,
            temperature=llm_settings.temperature,
            max_tokens=llm_settings.max_tokens,
            api_key=llm_settings.GROQ_API_KEY,
        )

    if settings.llm_provider == "gemini":
        if not llm_settings.GOOGLE_API_KEY:
            raise MissingCredentialsError("GOOGLE_API_KEY is not set")
        return ChatGoogleGenerativeAI(
            model=llm_settings.gemini_model,
            temperature=llm_settings.temperature,
            max_output_tokens=llm_settings.max_tokens,
            google_api_key=llm_settings.GOOGLE_API_KEY,
        )

    return ChatOllama(
        model=llm_settings.ollama_model,
        temperature=llm_settings.temperature,
        num_predict=llm_settings.max_tokens,
    )


def build_summary_prompt(text: str, custom_instruction: Optional[str] = None) -> str:
    prompt = "Please provide a comprehensive summary of the following text"

    if custom_instruction and custom_instruction.strip():
        prompt += f"\n\nCustom Instructions: {custom_instruction}"

    prompt += f"\n\nText to summarize:\n{text}"
    return prompt


def generate_summary_with_llm(
    model: Runnable, text: str, custom_instruction: Optional[str] = None
) -> str:
    chain = prompt_template | model | parser
    # the prompt goes in as a variable so braces in transcripts are not parsed
    summary = chain.invoke({"prompt": build_summary_prompt(text, custom_instruction)})
    return summary if summary.strip() else EMPTY_SUMMARY
