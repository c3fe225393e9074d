from fastapi import Depends, Request

from core.config import Settings
from services.llm_client import LLMClient


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_llm_client(settings: Settings = Depends(get_settings)) -> LLMClient:
    return LLMClient.from_settings(settings)
