"""Package entry point - composition root. Wire dependencies and run the CLI app."""

from next_a11y.infrastructure.config_file_loader import ConfigFileLoader
from next_a11y.infrastructure.di.container import A11yContainer
from next_a11y.infrastructure.services.result_cache import ResultCache
from next_a11y.interface.cli import CLIAppFactory, CLIDependencies


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    container = A11yContainer()

    deps = CLIDependencies(
        telemetry=container.get_telemetry_port(),
        filesystem=container.get_filesystem_gateway(),
        parser=container.get_parser(),
        fixer=container.get_fixer_gateway(),
        image_source=container.get_image_source(),
        text_reporter=container.get_text_reporter(),
        json_reporter=container.get_json_reporter(),
        load_file_config=ConfigFileLoader.load_config_from_fs,
        load_env=ConfigFileLoader.load_env,
        find_project_root=container.find_project_root,
        cache_factory=container.create_cache,
        score_store_factory=container.create_score_store,
        generator_factory=container.create_generator,
        format_bytes=ResultCache.format_bytes,
        console=container.get_console(),
    )

    app = CLIAppFactory.create_app(deps)
    app()


if __name__ == "__main__":
    main()
