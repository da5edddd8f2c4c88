"""Analysis entry point: remote model first, local rule scan as fallback."""

import logging

from .config import CredentialProvider, EnvCredentialProvider, Settings, get_settings
from .errors import MissingCredentialError, NormalizationError, RemoteAnalysisError
from .models import AnalysisOutcome, AnalysisState, EnhanceResponse, Finding, Language, SourceFile
from .normalizer import normalize_response
from .openrouter_client import OpenRouterClient
from .rules import scan

logger = logging.getLogger(__name__)


class CodeAnalyzer:
    """Analyzes one source file per call.

    With no API key the local rule scan runs directly (``local_only``).
    Otherwise exactly one remote attempt is made. Any remote or parsing
    failure is logged and replaced by the local scan (``fallback``).
    """

    def __init__(
        self,
        credentials: CredentialProvider | None = None,
        client: OpenRouterClient | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or get_settings()
        self.credentials = credentials or EnvCredentialProvider()
        self.client = client or OpenRouterClient(self.settings)

    async def run(self, source: SourceFile, model: str | None = None) -> AnalysisOutcome:
        """Analyze a file and report which strategy produced the findings."""
        content = source.text()
        language = source.language

        credential = self.credentials.get_credential()
        if not credential:
            logger.info(f"No OpenRouter API key, using local analysis for {source.name}")
            return AnalysisOutcome(
                state=AnalysisState.local_only,
                findings=scan(content, language),
            )

        model = model or self.settings.default_model
        try:
            raw_text = await self.client.request_analysis(
                content,
                source.extension if language is not Language.unknown else None,
                model,
                credential,
            )
            findings = normalize_response(raw_text)
        except (RemoteAnalysisError, NormalizationError) as e:
            reason = f"{type(e).__name__}: {e}"
            logger.warning(f"Remote analysis failed ({reason}). Falling back to local analysis.")
            return AnalysisOutcome(
                state=AnalysisState.fallback,
                findings=scan(content, language),
                model=model,
                fallback_reason=reason,
            )

        return AnalysisOutcome(
            state=AnalysisState.remote_ok,
            findings=findings,
            model=model,
        )

    async def analyze(self, source: SourceFile, model: str | None = None) -> list[Finding]:
        """Analyze a file and return its findings in detection order."""
        outcome = await self.run(source, model)
        return outcome.findings

    async def enhance(self, source: SourceFile, model: str | None = None) -> EnhanceResponse:
        """Ask the remote model for an improved version of a file.

        There is no local counterpart, so every failure is raised to the
        caller, including ``MissingCredentialError`` when no key is set.
        """
        content = source.text()
        credential = self.credentials.get_credential()
        if not credential:
            raise MissingCredentialError("OpenRouter API key is not configured")

        model = model or self.settings.default_model
        enhanced = await self.client.enhance_code(content, model, credential)
        return EnhanceResponse(file_name=source.name, model=model, enhanced_code=enhanced)
