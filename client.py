# client.py
# Small requests-based client for the local QA API.
from typing import Any, Dict, List, Optional

import requests

from config import api_url


class QAClient:
    def __init__(self, base_url: Optional[str] = None, timeout: float = 10):
        self.base_url = (base_url or api_url()).rstrip("/")
        self.timeout = timeout

    def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        r = requests.post(f"{self.base_url}{path}", json=payload, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def status(self) -> Dict[str, Any]:
        r = requests.get(f"{self.base_url}/", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def embed(self, text: str) -> List[float]:
        return self._post("/embed", {"text": text})["embeddings"]

    def answer(self, question: str) -> str:
        return self._post("/answer", {"question": question})["answer"]
