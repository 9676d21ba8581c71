"""
protoc-gen-twinport 插件入口

protoc 把 CodeGeneratorRequest 写入 stdin，并从 stdout 读取 CodeGeneratorResponse。
诊断写入响应的 error 字段，由 protoc 决定整次运行失败；日志只写 stderr。
"""
from typing import BinaryIO, Optional

import click

from application.dto import GenerationOptions
from application.services.generation_service import GenerationService
from core.config import PLUGIN_NAME, VERSION, Settings, parse_parameter, settings
from core.exceptions import format_diagnostics
from core.logging_config import configure_logging, get_logger
from domain.common.exceptions import InvalidParameter
from infrastructure.protobuf import descriptor_reader, plugin_io


logger = get_logger(__name__)


def version_string() -> str:
    return f"{PLUGIN_NAME} {VERSION}"


def run_plugin(stdin: BinaryIO, stdout: BinaryIO, config: Optional[Settings] = None) -> Optional[str]:
    """Handle one protoc invocation. Returns the error text written to the response, if any."""
    config = config or settings
    request = plugin_io.read_request(stdin)

    try:
        config = config.merged(parse_parameter(request.parameter))
    except InvalidParameter as exc:
        error = format_diagnostics([exc])
        plugin_io.write_response(stdout, plugin_io.build_response([], error))
        return error

    if config.version:
        # stdout belongs to protoc here
        click.echo(version_string(), err=True)
        plugin_io.write_response(stdout, plugin_io.build_response([]))
        return None

    try:
        parsed = descriptor_reader.read_request(request)
        service = GenerationService(
            GenerationOptions(
                register_gateway=config.register_gateway,
                protoc_version=parsed.compiler_version,
            )
        )
        result = service.run(parsed.files)
    except Exception as exc:
        logger.error("plugin_failed", error=str(exc), exc_info=True)
        error = f"{PLUGIN_NAME}: {exc}"
        plugin_io.write_response(stdout, plugin_io.build_response([], error))
        return error

    error = format_diagnostics(result.diagnostics)
    plugin_io.write_response(stdout, plugin_io.build_response(result.files, error))
    return error


@click.command(name=PLUGIN_NAME, help="protoc plugin generating gRPC + HTTP gateway descriptors.")
@click.option("--version", "show_version", is_flag=True, flag_value=True, default=None, help="print the version and exit")
@click.option(
    "--register-gateway/--no-register-gateway",
    default=None,
    help="enable register handler servers in register_gateway",
)
def cli(show_version: Optional[bool], register_gateway: Optional[bool]) -> None:
    overrides = {"version": show_version, "register_gateway": register_gateway}
    config = settings.merged({k: v for k, v in overrides.items() if v is not None})
    if config.version:
        click.echo(version_string())
        return

    configure_logging(config)
    run_plugin(click.get_binary_stream("stdin"), click.get_binary_stream("stdout"), config)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
