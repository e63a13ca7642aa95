"""Generation backend shared by every component that talks to an LLM."""

import atexit
import signal
import threading
import time
from typing import Callable

from quill.config import ModelSpec
from quill.llm.base import LLMClient, LLMError, Validator
from quill.llm.providers import LISTED_PROVIDERS, get_client
from quill.output import print_verbose

ClientFactory = Callable[[str, str | None], LLMClient]

_registered: list['GenerationBackend'] = []
_hooks_installed = False


class GenerationBackend:
    """Lazily creates one client per provider/model pair and reuses it.

    Pass one instance to everything that generates text; call close() (or use
    it as a context manager) to release the clients.
    """

    def __init__(self, client_factory: ClientFactory = get_client, verbose: bool = False):
        self._factory = client_factory
        self._clients: dict[ModelSpec, LLMClient] = {}
        self.verbose = verbose

    def client_for(self, spec: ModelSpec) -> LLMClient:
        if spec not in self._clients:
            self._clients[spec] = self._factory(spec.provider, spec.model)
        return self._clients[spec]

    def generate(self, prompt: str, spec: ModelSpec, validate: Validator | None = None) -> str:
        client = self.client_for(spec)
        start = time.time()
        response = client.generate(prompt, validate=validate)
        if self.verbose:
            elapsed = time.time() - start
            print_verbose(f"{client.name}: prompt ~{len(prompt)//4} tokens ({len(prompt)} chars), "
                          f"response {response.tokens_used} tokens, {elapsed:.2f}s")
        if not response.content.strip():
            raise LLMError(f"{client.name} returned an empty response")
        return response.content

    def list_models(self, providers: list[str] | None = None) -> dict[str, list[str]]:
        """Models per provider. Providers that can't be reached are left out."""
        result = {}
        for provider in providers or LISTED_PROVIDERS:
            try:
                client = self._factory(provider, None)
            except LLMError as e:
                if self.verbose:
                    print_verbose(f"{provider}: {e}")
                continue
            try:
                result[provider] = client.list_models()
            except LLMError as e:
                if self.verbose:
                    print_verbose(f"{provider}: {e}")
            finally:
                client.close()
        return result

    @property
    def is_open(self) -> bool:
        return len(self._clients) > 0

    def close(self) -> None:
        """Release every client and unregister. Safe to call more than once."""
        if self in _registered:
            _registered.remove(self)
        clients, self._clients = list(self._clients.values()), {}
        for client in clients:
            client.close()

    def __enter__(self) -> 'GenerationBackend':
        return self

    def __exit__(self, *args) -> None:
        self.close()


def _close_registered() -> None:
    for backend in list(_registered):
        backend.close()


def _exit_on_sigterm(signum, frame) -> None:
    raise SystemExit(0)


def register_cleanup(backend: GenerationBackend) -> None:
    """Close backend at process exit and on SIGTERM. Hooks are installed once."""
    global _hooks_installed
    if backend not in _registered:
        _registered.append(backend)
    if _hooks_installed:
        return
    atexit.register(_close_registered)
    if threading.current_thread() is threading.main_thread():
        signal.signal(signal.SIGTERM, _exit_on_sigterm)
    _hooks_installed = True


__all__ = ["GenerationBackend", "register_cleanup"]
