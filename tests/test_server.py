from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from openstack_mcp.errors import AuthError
from openstack_mcp.server import build_server, run_entrypoint


@patch("openstack_mcp.server.load_settings")
@patch("openstack_mcp.server.configure_logging")
@patch("openstack_mcp.server.establish")
@patch("openstack_mcp.server.build_registry")
@patch("openstack_mcp.server.MCPServer")
@patch("openstack_mcp.server.register_tools")
def test_build_server(
    mock_register, mock_server_cls, mock_build_registry, mock_establish, mock_log, mock_settings
):
    settings = MagicMock()
    settings.server.instructions = "Instructions"
    settings.server.invocation_timeout_seconds = 30.0
    mock_settings.return_value = settings

    server = build_server()

    mock_log.assert_called_once()
    mock_establish.assert_called_once_with(settings)
    mock_build_registry.assert_called_once_with(mock_establish.return_value, settings)
    assert mock_server_cls.call_args.kwargs["name"] == "openstack-mcp"
    assert mock_server_cls.call_args.kwargs["instructions"] == "Instructions"
    mock_register.assert_called_once_with(
        mock_server_cls.return_value, mock_build_registry.return_value, timeout=30.0
    )
    assert server is mock_server_cls.return_value


@patch("openstack_mcp.server.load_settings")
@patch("openstack_mcp.server.configure_logging")
@patch("openstack_mcp.server.establish", side_effect=AuthError("Authentication failed"))
@patch("openstack_mcp.server.MCPServer")
def test_auth_failure_stops_before_registration(
    mock_server_cls, _mock_establish, _mock_log, _mock_settings
):
    with pytest.raises(AuthError):
        build_server()

    mock_server_cls.assert_not_called()


@patch("openstack_mcp.server.load_settings")
@patch("openstack_mcp.server.build_server", side_effect=AuthError("Authentication failed"))
def test_run_entrypoint_exits_on_auth_error(_mock_build, _mock_settings):
    with pytest.raises(SystemExit) as excinfo:
        run_entrypoint()

    assert excinfo.value.code == 1


@patch("openstack_mcp.server.load_settings")
@patch("openstack_mcp.server.build_server")
def test_run_entrypoint_stdio_branch(mock_build, mock_settings):
    mock_settings.return_value.server.transport_mode = "stdio"

    run_entrypoint()

    mock_build.return_value.run.assert_called_once_with()


@patch("openstack_mcp.server.load_settings")
@patch("openstack_mcp.server.build_server")
def test_run_entrypoint_http_branch(mock_build, mock_settings):
    settings = mock_settings.return_value
    settings.server.transport_mode = "http"
    settings.server.host = "0.0.0.0"
    settings.server.port = 8000

    run_entrypoint()

    mock_build.return_value.run.assert_called_once_with(transport="http", host="0.0.0.0", port=8000)
