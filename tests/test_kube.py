"""Tests for kubectl access and name resolution (kswitch/core/kube)."""

from types import SimpleNamespace
from unittest.mock import patch

import pytest

from kswitch.core.exceptions import AmbiguousContextError, ContextNotFoundError, KubectlError
from kswitch.core.kube import KubectlClient, resolve_context, short_name

ARN = "arn:aws:eks:us-east-1:123456789012:cluster/payments-dev"


def _completed(stdout="", stderr="", returncode=0):
    return SimpleNamespace(stdout=stdout, stderr=stderr, returncode=returncode)


# ---------------------------------------------------------------------------
# Tests: KubectlClient
# ---------------------------------------------------------------------------

class TestKubectlClient:
    """kubectl invocations."""

    def test_list_contexts(self):
        client = KubectlClient("kubectl")
        with patch("kswitch.core.kube.kubectl.subprocess.run") as mock_run:
            mock_run.return_value = _completed("alpha\n\nbeta\n  \n")
            assert client.list_contexts() == ["alpha", "beta"]
        args = mock_run.call_args[0][0]
        assert args == ["kubectl", "config", "get-contexts", "-o", "name"]

    def test_list_contexts_failure(self):
        client = KubectlClient("kubectl")
        with patch("kswitch.core.kube.kubectl.subprocess.run") as mock_run:
            mock_run.return_value = _completed(stderr="no kubeconfig", returncode=1)
            with pytest.raises(KubectlError) as exc_info:
                client.list_contexts()
        assert str(exc_info.value).startswith("failed to get contexts: ")
        assert exc_info.value.exit_code == 1
        assert exc_info.value.output == "no kubeconfig"

    def test_missing_binary(self):
        client = KubectlClient("kubectl-missing")
        with patch("kswitch.core.kube.kubectl.subprocess.run", side_effect=FileNotFoundError("nope")):
            with pytest.raises(KubectlError, match="Cannot run kubectl-missing"):
                client.use_context("alpha")

    def test_current_context(self):
        client = KubectlClient("kubectl")
        with patch("kswitch.core.kube.kubectl.subprocess.run", return_value=_completed("alpha\n")):
            assert client.current_context() == "alpha"

    def test_current_context_unset(self):
        client = KubectlClient("kubectl")
        with patch(
            "kswitch.core.kube.kubectl.subprocess.run",
            return_value=_completed(stderr="current-context is not set", returncode=1),
        ):
            assert client.current_context() == ""

    def test_use_and_rename(self):
        client = KubectlClient("kubectl")
        with patch("kswitch.core.kube.kubectl.subprocess.run", return_value=_completed()) as mock_run:
            client.use_context("beta")
            client.rename_context("old", "new")
        calls = [call[0][0] for call in mock_run.call_args_list]
        assert calls == [
            ["kubectl", "config", "use-context", "beta"],
            ["kubectl", "config", "rename-context", "old", "new"],
        ]

    def test_binary_from_paths(self, monkeypatch):
        from kswitch.core.paths import reset_paths

        monkeypatch.setenv("KSW_KUBECTL", "/usr/local/bin/kubectl")
        reset_paths()
        try:
            assert KubectlClient().binary == "/usr/local/bin/kubectl"
        finally:
            reset_paths()


# ---------------------------------------------------------------------------
# Tests: name resolution
# ---------------------------------------------------------------------------

class TestShortName:
    """Short names."""

    def test_arn(self):
        assert short_name(ARN) == "payments-dev"

    def test_plain(self):
        assert short_name("kind-local") == "kind-local"

    def test_trailing_slash(self):
        assert short_name("weird/") == ""


class TestResolveContext:
    """Exact, short and substring resolution."""

    CONTEXTS = [ARN, "kind-local", "gke-orders-dev", "gke-orders-qa"]

    def test_exact(self):
        assert resolve_context("kind-local", self.CONTEXTS) == "kind-local"

    def test_strips_quotes_and_whitespace(self):
        assert resolve_context(" 'kind-local' ", self.CONTEXTS) == "kind-local"

    def test_short_name(self):
        assert resolve_context("payments-dev", self.CONTEXTS) == ARN

    def test_unique_substring(self):
        assert resolve_context("qa", self.CONTEXTS) == "gke-orders-qa"

    def test_ambiguous(self):
        with pytest.raises(AmbiguousContextError) as exc_info:
            resolve_context("orders", self.CONTEXTS)
        assert exc_info.value.matches == ["gke-orders-dev", "gke-orders-qa"]

    def test_not_found(self):
        with pytest.raises(ContextNotFoundError, match="Context 'nope' not found."):
            resolve_context("nope", self.CONTEXTS)

    def test_empty_name_not_found(self):
        with pytest.raises(ContextNotFoundError):
            resolve_context("", self.CONTEXTS)
