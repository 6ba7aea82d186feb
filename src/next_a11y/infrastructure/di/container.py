from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

from rich.console import Console

from next_a11y.infrastructure.config_file_loader import ConfigFileLoader
from next_a11y.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from next_a11y.infrastructure.gateways.score_store import LocalScoreStore
from next_a11y.infrastructure.gateways.source_fixer_gateway import SourceFixerGateway
from next_a11y.infrastructure.gateways.tree_sitter_gateway import TreeSitterGateway
from next_a11y.infrastructure.services.generation import ProviderFactory
from next_a11y.infrastructure.services.image_source import ImageSourceResolver
from next_a11y.infrastructure.services.result_cache import ResultCache
from next_a11y.interface.reporters import JsonScanReporter, TerminalScanReporter
from next_a11y.interface.telemetry import ProjectTelemetry

if TYPE_CHECKING:
    from next_a11y.domain.config import ResolvedConfig
    from next_a11y.domain.protocols import (
        FileSystemProtocol,
        ImageSourceProtocol,
        ResultCacheProtocol,
        ScoreStoreProtocol,
        SourceFixerProtocol,
        SourceParserProtocol,
        TelemetryPort,
        TextGeneratorProtocol,
    )
    from next_a11y.interface.reporters import ScanReporter


class A11yContainer:
    """Dependency Injection Container for next-a11y."""

    def __init__(self) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register default implementations for protocols."""
        console = Console()
        self.register_singleton("Console", console)
        self.register_singleton("TelemetryPort", ProjectTelemetry("next-a11y", "cyan", "accessibility scan"))
        filesystem = FileSystemGateway()
        self.register_singleton("FileSystemGateway", filesystem)
        parser = TreeSitterGateway(filesystem)
        self.register_singleton("TreeSitterGateway", parser)
        self.register_singleton("SourceFixerGateway", SourceFixerGateway(parser))
        self.register_singleton("ImageSource", ImageSourceResolver(filesystem))
        self.register_singleton("TextReporter", TerminalScanReporter(console))
        self.register_singleton("JsonReporter", JsonScanReporter(console))

    def register_singleton(self, key: str, instance: Any) -> None:
        """Register a singleton instance."""
        self._singletons[key] = instance

    def get(self, key: str) -> Any:
        """Retrieve a dependency by key. Prefer explicit get_* methods for type safety."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    def get_console(self) -> Console:
        return cast(Console, self.get("Console"))

    def get_telemetry_port(self) -> "TelemetryPort":
        """Return the telemetry/UI port."""
        return cast("TelemetryPort", self.get("TelemetryPort"))

    def get_filesystem_gateway(self) -> "FileSystemProtocol":
        """Return the filesystem gateway."""
        return cast("FileSystemProtocol", self.get("FileSystemGateway"))

    def get_parser(self) -> "SourceParserProtocol":
        """Return the TSX parser gateway."""
        return cast("SourceParserProtocol", self.get("TreeSitterGateway"))

    def get_fixer_gateway(self) -> "SourceFixerProtocol":
        """Return the fixer gateway."""
        return cast("SourceFixerProtocol", self.get("SourceFixerGateway"))

    def get_image_source(self) -> "ImageSourceProtocol":
        return cast("ImageSourceProtocol", self.get("ImageSource"))

    def get_text_reporter(self) -> "ScanReporter":
        return cast("ScanReporter", self.get("TextReporter"))

    def get_json_reporter(self) -> "ScanReporter":
        return cast("ScanReporter", self.get("JsonReporter"))

    def create_cache(self, cache_dir: str) -> "ResultCacheProtocol":
        """Result cache rooted at ``cache_dir``; one per project."""
        return ResultCache(cache_dir, self.get_filesystem_gateway())

    def create_score_store(self, cache_dir: str) -> "ScoreStoreProtocol":
        return LocalScoreStore(base_path=cache_dir, filesystem=self.get_filesystem_gateway())

    @staticmethod
    def create_generator(config: "ResolvedConfig") -> "TextGeneratorProtocol":
        """Generator for the configured provider. Raises ProviderConfigurationError."""
        return ProviderFactory.create(config)

    @staticmethod
    def find_project_root(start: str) -> Path:
        return ConfigFileLoader.find_project_root(start)
