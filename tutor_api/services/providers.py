"""Chat-completion provider clients and sequential fallback."""

from typing import Any

import httpx

from tutor_api.core.config import ProviderConfig
from tutor_api.core.logging import get_logger
from tutor_api.models.providers import ProviderResult, ProviderType
from tutor_api.services.prompts import build_system_prompt

logger = get_logger(__name__)


class ProviderError(Exception):
    """Base exception for a failed call to a single provider."""

    def __init__(self, provider: ProviderType, message: str) -> None:
        super().__init__(message)
        self.provider = provider


class ProviderTransportError(ProviderError):
    """Raised when the provider could not be reached."""

    pass


class ProviderAPIError(ProviderError):
    """Raised when the provider answers with a non-2xx status."""

    def __init__(self, provider: ProviderType, status_code: int, body: str) -> None:
        super().__init__(provider, f"{provider.value} returned HTTP {status_code}")
        self.status_code = status_code
        self.body = body


class ProviderResponseError(ProviderError):
    """Raised when a 2xx reply does not follow the chat-completions schema."""

    pass


class AllProvidersUnavailableError(Exception):
    """Raised when every provider in the chain failed."""

    def __init__(self, errors: list[ProviderError]) -> None:
        super().__init__("All AI models are currently unavailable")
        self.errors = errors

    @property
    def attempted_providers(self) -> list[ProviderType]:
        return [error.provider for error in self.errors]


class ProviderClient:
    """
    Client for one OpenAI-style chat-completions endpoint.

    Each call opens its own HTTP client, sends exactly one request and never
    retries; fallback is the manager's concern.
    """

    def __init__(
        self,
        config: ProviderConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the provider client.

        Args:
            config: Resolved provider configuration
            transport: Optional httpx transport, used to stub the upstream in tests
        """
        self.config = config
        self._transport = transport

    @property
    def provider(self) -> ProviderType:
        return self.config.provider

    def build_payload(self, message: str, context: str = "") -> dict[str, Any]:
        """Build the chat-completions request body."""
        return {
            "model": self.config.model,
            "messages": [
                {"role": "system", "content": build_system_prompt(context)},
                {"role": "user", "content": message},
            ],
            "max_tokens": self.config.max_tokens,
            "temperature": self.config.temperature,
        }

    async def send(self, message: str, context: str = "") -> ProviderResult:
        """
        Send one chat-completion request.

        Args:
            message: User message
            context: Optional context appended to the system prompt

        Returns:
            Parsed provider result

        Raises:
            ProviderTransportError: If the request could not be completed
            ProviderAPIError: If the provider returned a non-2xx status
            ProviderResponseError: If the reply payload is malformed
        """
        headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
        }
        try:
            async with httpx.AsyncClient(
                timeout=self.config.timeout_seconds, transport=self._transport
            ) as client:
                response = await client.post(
                    self.config.endpoint,
                    json=self.build_payload(message, context),
                    headers=headers,
                )
        except httpx.HTTPError as exc:
            logger.error(
                "Provider request failed",
                extra={"provider": self.provider.value, "error": str(exc)},
            )
            raise ProviderTransportError(
                self.provider, f"{self.provider.value} request failed: {exc}"
            ) from exc

        if not response.is_success:
            logger.error(
                "Provider returned an error response",
                extra={
                    "provider": self.provider.value,
                    "status_code": response.status_code,
                    "body": response.text[:1000],
                },
            )
            raise ProviderAPIError(self.provider, response.status_code, response.text)

        return self._parse(response)

    def _parse(self, response: httpx.Response) -> ProviderResult:
        """Extract the first completion and the token usage."""
        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"]
            usage = data.get("usage") or {}
            return ProviderResult(
                content=content,
                provider=self.provider,
                model=self.config.label,
                tokens=usage.get("total_tokens") or 0,
            )
        # ValidationError is a ValueError subclass
        except (ValueError, KeyError, IndexError, TypeError, AttributeError) as exc:
            logger.error(
                "Provider returned a malformed payload",
                extra={"provider": self.provider.value, "body": response.text[:1000]},
            )
            raise ProviderResponseError(
                self.provider, f"{self.provider.value} returned a malformed payload"
            ) from exc

    async def attempt(self, message: str, context: str = "") -> ProviderResult | ProviderError:
        """Send a request and return either the result or the provider error as a value."""
        try:
            return await self.send(message, context)
        except ProviderError as exc:
            return exc


class ProviderManager:
    """
    Ordered chain of provider clients with sequential fallback.

    Providers are tried one at a time in configured order; the first success
    wins and later providers are never contacted.
    """

    def __init__(self, clients: list[ProviderClient]) -> None:
        """
        Initialize the provider manager.

        Args:
            clients: Provider clients, primary first
        """
        self.clients = clients
        if not clients:
            logger.warning("No chat providers are enabled")
        for client in clients:
            logger.info(
                "Chat provider registered",
                extra={"provider": client.provider.value, "model": client.config.model},
            )

    @classmethod
    def from_configs(cls, configs: list[ProviderConfig]) -> "ProviderManager":
        """Build a manager with one HTTP client per provider configuration."""
        return cls([ProviderClient(config) for config in configs])

    def get_provider_chain(self) -> list[ProviderType]:
        """Return the providers in the order they are tried."""
        return [client.provider for client in self.clients]

    async def generate(self, message: str, context: str = "") -> ProviderResult:
        """
        Get a reply from the first provider that succeeds.

        Args:
            message: User message
            context: Optional context appended to the system prompt

        Returns:
            Result of the first successful provider

        Raises:
            AllProvidersUnavailableError: If every provider failed
        """
        errors: list[ProviderError] = []

        for client in self.clients:
            outcome = await client.attempt(message, context)
            if isinstance(outcome, ProviderResult):
                if errors:
                    logger.info(
                        "Fallback provider succeeded",
                        extra={
                            "provider": outcome.provider.value,
                            "failed_providers": [error.provider.value for error in errors],
                        },
                    )
                return outcome

            errors.append(outcome)
            logger.warning(
                "Provider failed, trying next provider if available",
                extra={"provider": client.provider.value, "error": str(outcome)},
            )

        logger.error(
            "All chat providers failed",
            extra={"attempted": [error.provider.value for error in errors]},
        )
        raise AllProvidersUnavailableError(errors)
