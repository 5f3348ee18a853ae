from typing import Optional

import requests

from cvmatch.models.settings import LLMSettings


def ollama_generate(prompt: str, settings: Optional[LLMSettings] = None) -> str:
    settings = settings or LLMSettings()
    url = f"{settings.base_url}/api/generate"
    resp = requests.post(
        url,
        json={
            "model": settings.model_name,
            "prompt": prompt,
            "options": {"temperature": settings.temperature},
            "stream": False  # single JSON body, not NDJSON chunks
        },
        timeout=settings.timeout,
    )
    resp.raise_for_status()
    return resp.json().get("response", "") or ""
