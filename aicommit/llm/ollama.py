"""Ollama LLM Client for Local and Cloud Models"""

import http.client
import json
import urllib.error
import urllib.request

from aicommit.config import RunConfig
from aicommit.llm.base import LLMClient, ProviderError, log_payload
from aicommit.prompts import SYSTEM_PROMPT, build_user_prompt

DEFAULT_CLOUD_MODEL = "devstral-small-2:24b"


class OllamaError(ProviderError):
    """Raised when an Ollama request fails."""
    pass


def _read_json(req: urllib.request.Request):
    with urllib.request.urlopen(req) as response:
        return json.loads(response.read().decode('utf-8'))


def list_local_models(tags_url: str) -> list[str]:
    """Names of installed models, in the order the server lists them."""
    try:
        data = _read_json(urllib.request.Request(tags_url))
    except urllib.error.HTTPError as e:
        raise OllamaError(f"Could not list Ollama models: {e.code} {e.reason}")
    except urllib.error.URLError as e:
        raise OllamaError(f"Could not connect to Ollama: {e.reason}. Make sure it is running with: ollama serve")
    except (json.JSONDecodeError, UnicodeDecodeError, http.client.HTTPException):
        raise OllamaError("Unexpected response from Ollama while listing models")
    except OSError as e:
        raise OllamaError(f"Connection to Ollama lost: {e}. Check that 'ollama serve' is still running.")

    models = data.get('models') if isinstance(data, dict) else None
    if not isinstance(models, list):
        raise OllamaError("Unexpected response from Ollama while listing models")
    return [m['name'] for m in models if isinstance(m, dict) and isinstance(m.get('name'), str)]


class OllamaClient(LLMClient):
    """Ollama chat client. Local mode requires: ollama serve"""

    def __init__(self, config: RunConfig):
        self.model = config.model
        self.cloud = config.ollama_mode == "cloud"

    @property
    def name(self) -> str:
        return f"{'Ollama Cloud' if self.cloud else 'Ollama'} ({self.model})"

    def _build_request(self, diff: str, config: RunConfig) -> urllib.request.Request:
        payload = {
            "model": config.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_user_prompt(diff)},
            ],
            "stream": False,
        }
        log_payload(config, "Ollama request body", payload)

        headers = {"Content-Type": "application/json"}
        if config.api_key:
            headers["Authorization"] = f"Bearer {config.api_key}"

        data = json.dumps(payload).encode('utf-8')
        return urllib.request.Request(config.url, data=data, headers=headers, method="POST")

    def generate(self, diff: str, config: RunConfig) -> str:
        """Call Ollama's chat API once; errors are reported, not retried."""
        req = self._build_request(diff, config)

        try:
            result = _read_json(req)
        except urllib.error.HTTPError as e:
            if e.code == 404 and not self.cloud:
                raise OllamaError(f"Model '{config.model}' not found. Run: ollama pull {config.model}")
            raise OllamaError(f"Ollama returned an error: {e.code} {e.reason}")
        except urllib.error.URLError as e:
            raise OllamaError(f"Could not connect to Ollama: {e.reason}. Make sure it is running with: ollama serve")
        except (json.JSONDecodeError, UnicodeDecodeError):
            raise OllamaError("Unexpected response from Ollama: missing message content")
        except http.client.HTTPException as e:
            raise OllamaError(f"Incomplete response from Ollama: {e}")
        except OSError as e:
            raise OllamaError(f"Connection to Ollama lost: {e}. Check that 'ollama serve' is still running.")

        log_payload(config, "Ollama response", result)

        message = result.get("message") if isinstance(result, dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str):
            raise OllamaError("Unexpected response from Ollama: missing message content")
        return content.strip()
