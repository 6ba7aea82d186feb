import pytest

from next_a11y.infrastructure.di.container import A11yContainer
from next_a11y.infrastructure.gateways.score_store import LocalScoreStore
from next_a11y.infrastructure.gateways.source_fixer_gateway import SourceFixerGateway
from next_a11y.infrastructure.gateways.tree_sitter_gateway import TreeSitterGateway
from next_a11y.infrastructure.services.result_cache import ResultCache


class TestA11yContainer:
    def test_initialization_registers_telemetry(self) -> None:
        container = A11yContainer()
        telemetry = container.get("TelemetryPort")
        assert telemetry is not None
        assert telemetry.project_name == "next-a11y"

    def test_register_and_get_singleton(self) -> None:
        container = A11yContainer()
        mock_dep = {"foo": "bar"}
        container.register_singleton("MockDep", mock_dep)

        assert container.get("MockDep") is mock_dep

    def test_get_missing_dependency_raises_error(self) -> None:
        container = A11yContainer()
        with pytest.raises(ValueError, match=r"Dependency 'Missing' not registered\."):
            container.get("Missing")

    def test_typed_getters(self) -> None:
        container = A11yContainer()
        assert isinstance(container.get_parser(), TreeSitterGateway)
        assert isinstance(container.get_fixer_gateway(), SourceFixerGateway)
        assert container.get_filesystem_gateway() is container.get("FileSystemGateway")

    def test_per_project_factories(self, tmp_path) -> None:
        container = A11yContainer()
        assert isinstance(container.create_cache(str(tmp_path)), ResultCache)
        assert isinstance(container.create_score_store(str(tmp_path)), LocalScoreStore)
