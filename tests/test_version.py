"""
Kubernetes version gate tests.
"""

import io
import subprocess
import sys
from pathlib import Path
from unittest import mock

# Add project root to import path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from kubescan.core.version import (
    KubectlVersionQuery,
    VersionGate,
    VersionInfo,
    check_version,
    extract_field,
    find_version_segment,
    parse_version,
)
from kubescan.output.reporter import Reporter


def kubectl_output(client: tuple[str, str], server: tuple[str, str]) -> str:
    """Build kubectl version output in the version.Info format."""
    return (
        f'Client Version: version.Info{{Major:"{client[0]}", Minor:"{client[1]}", '
        'GitVersion:"v1.21.3", GitCommit:"ca643a4", GoVersion:"go1.16.6", '
        'Platform:"linux/amd64"}\n'
        f'Server Version: version.Info{{Major:"{server[0]}", Minor:"{server[1]}", '
        'GitVersion:"v1.21.1", GitCommit:"5e58841", GoVersion:"go1.16.4", '
        'Platform:"linux/amd64"}\n'
    )


class TestVersionParsing:
    """Tests for the segment and field extraction steps."""

    def test_find_segment_per_role(self) -> None:
        text = kubectl_output(("1", "21"), ("1", "20"))

        client = find_version_segment("Client", text)
        server = find_version_segment("Server", text)

        assert client.startswith("Client Version: version.Info{")
        assert 'Minor:"21"' in client and 'Minor:"20"' not in client
        assert server.startswith("Server Version: version.Info{")
        assert 'Minor:"20"' in server

    def test_find_segment_absent(self) -> None:
        assert find_version_segment("Server", "Client Version: v1.28.2\n") == ""

    def test_extract_fields(self) -> None:
        segment = 'Server Version: version.Info{Major:"1", Minor:"20"}'
        assert extract_field("Major", segment) == "1"
        assert extract_field("Minor", segment) == "20"

    def test_extract_non_numeric_field(self) -> None:
        """Minor versions like "20+" are not numeric and not extracted."""
        segment = 'Server Version: version.Info{Major:"1", Minor:"20+"}'
        assert extract_field("Minor", segment) == ""

    def test_parse_version(self) -> None:
        info = parse_version("Client", kubectl_output(("1", "21"), ("1", "20")))
        assert info == VersionInfo(role="Client", major="1", minor="21")
        assert info.complete
        assert str(info) == "1.21"

    def test_parse_missing_role(self) -> None:
        info = parse_version("Server", "Client Version: version.Info{Major:\"1\", Minor:\"21\"}")
        assert info.major is None
        assert info.minor is None
        assert not info.complete


class TestCheckVersion:
    """Tests for comparing one role against the baseline."""

    def test_server_mismatch(self) -> None:
        text = kubectl_output(("1", "21"), ("1", "20"))

        msg = check_version("Server", text, "1", "21")

        assert msg != ""
        assert "Server" in msg
        assert "1.20" in msg

    def test_match_is_silent(self) -> None:
        text = kubectl_output(("1", "21"), ("1", "21"))

        assert check_version("Server", text, "1", "21") == ""
        assert check_version("Client", text, "1", "21") == ""

    def test_string_comparison(self) -> None:
        """"01" and "1" are different versions."""
        text = kubectl_output(("01", "21"), ("1", "21"))

        assert check_version("Client", text, "1", "21") == "Unexpected Client version 01.21"

    def test_undetectable(self) -> None:
        text = "Server Version: version.Info{GitVersion:\"v1.21.1\"}"

        msg = check_version("Server", text, "1", "21")

        assert msg.startswith("Couldn't find Server version from kubectl output")
        assert text in msg


class TestVersionGate:
    """Tests for the best-effort version gate."""

    def _gate(self, output: str, error=None, available: bool = True):
        reporter = Reporter(file=io.StringIO())
        gate = VersionGate(
            reporter,
            query=lambda: (output, error),
            available=lambda: available,
        )
        return gate, reporter

    def test_expected_versions(self) -> None:
        gate, reporter = self._gate(kubectl_output(("1", "21"), ("1", "21")))

        assert gate.verify("1", "21") == []
        assert reporter.warnings == []

    def test_server_mismatch_warns(self) -> None:
        gate, reporter = self._gate(kubectl_output(("1", "21"), ("1", "20")))

        messages = gate.verify("1", "21")

        assert messages == ["Unexpected Server version 1.20"]
        assert reporter.warnings == messages
        assert "[WARN] Unexpected Server version 1.20" in reporter.file.getvalue()

    def test_both_roles_mismatch(self) -> None:
        gate, _ = self._gate(kubectl_output(("1", "19"), ("1", "20")))

        assert gate.verify("1", "21") == [
            "Unexpected Client version 1.19",
            "Unexpected Server version 1.20",
        ]

    def test_kubectl_missing(self) -> None:
        query = mock.MagicMock()
        reporter = Reporter(file=io.StringIO())
        gate = VersionGate(reporter, query=query, available=lambda: False)

        assert gate.verify("1", "21") == ["Kubernetes version check skipped"]
        query.assert_not_called()

    def test_error_without_output(self) -> None:
        gate, _ = self._gate("", error="exit status 1")

        assert gate.verify("1", "21") == [
            "Kubernetes version check skipped with error exit status 1"
        ]

    def test_error_with_output_still_parses(self) -> None:
        """Server unreachable: the client version is still checked."""
        output = (
            'Client Version: version.Info{Major:"1", Minor:"21"}\n'
        )
        gate, _ = self._gate(output, error="exit status 1")

        messages = gate.verify("1", "21")

        assert messages[0] == "Kubernetes version check skipped with error exit status 1"
        assert len(messages) == 2
        assert messages[1].startswith("Couldn't find Server version")


class TestKubectlVersionQuery:
    """Tests for the kubectl runner."""

    def test_available_uses_which(self) -> None:
        query = KubectlVersionQuery(which=lambda name: None)
        assert query.available() is False
        query = KubectlVersionQuery(which=lambda name: f"/usr/bin/{name}")
        assert query.available() is True

    @mock.patch("kubescan.core.version.subprocess.run")
    def test_success(self, mock_run: mock.MagicMock) -> None:
        mock_run.return_value = mock.MagicMock(returncode=0, stdout="out", stderr="")

        assert KubectlVersionQuery()() == ("out", None)
        assert mock_run.call_args[0][0] == ["kubectl", "version"]

    @mock.patch("kubescan.core.version.subprocess.run")
    def test_non_zero_exit(self, mock_run: mock.MagicMock) -> None:
        mock_run.return_value = mock.MagicMock(returncode=1, stdout="partial", stderr="refused")

        assert KubectlVersionQuery()() == ("partial", "exit status 1")

    @mock.patch("kubescan.core.version.subprocess.run")
    def test_spawn_failure(self, mock_run: mock.MagicMock) -> None:
        mock_run.side_effect = FileNotFoundError("kubectl")

        output, error = KubectlVersionQuery()()
        assert output == ""
        assert "kubectl" in error

    @mock.patch("kubescan.core.version.subprocess.run")
    def test_timeout(self, mock_run: mock.MagicMock) -> None:
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="kubectl", timeout=5)

        output, error = KubectlVersionQuery(timeout=5)()
        assert output == ""
        assert error
