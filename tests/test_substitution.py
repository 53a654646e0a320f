"""
Placeholder substitution tests.
"""

import sys
from pathlib import Path

# Add project root to import path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from kubescan.core.substitution import (
    SubstitutionEngine,
    make_substitutions,
    multi_word_replace,
    placeholder,
)


class TestMultiWordReplace:
    """Tests for quoting multi-word values."""

    def test_single_word(self) -> None:
        assert multi_word_replace("$x --flag", "$x", "/usr/bin/kubelet") == (
            "/usr/bin/kubelet --flag"
        )

    def test_multi_word_is_quoted(self) -> None:
        assert multi_word_replace("$x --flag", "$x", "hyperkube kubelet") == (
            "'hyperkube kubelet' --flag"
        )

    def test_every_occurrence(self) -> None:
        assert multi_word_replace("$x; $x", "$x", "a") == "a; a"


class TestMakeSubstitutions:
    """Tests for substituting a resolved map."""

    def test_whitespace_value_is_quoted(self) -> None:
        result = make_substitutions("$comp_bin --flag", "_bin", {"comp": "/usr/bin/my comp"})
        assert result == "'/usr/bin/my comp' --flag"

    def test_empty_value_leaves_placeholder(self) -> None:
        result = make_substitutions("$comp_bin --flag", "_bin", {"comp": ""})
        assert result == "$comp_bin --flag"

    def test_independent_keys(self) -> None:
        template = "ps -ef | grep $apiserverbin | grep -v $schedulerbin"
        result = make_substitutions(template, "bin", {
            "apiserver": "kube-apiserver",
            "scheduler": "kube-scheduler",
        })
        assert result == "ps -ef | grep kube-apiserver | grep -v kube-scheduler"

    def test_other_suffix_untouched(self) -> None:
        result = make_substitutions("$kubeletbin $kubeletconf", "bin", {"kubelet": "kubelet"})
        assert result == "kubelet $kubeletconf"

    def test_no_placeholders(self) -> None:
        assert make_substitutions("echo ok", "bin", {"kubelet": "kubelet"}) == "echo ok"

    def test_placeholder_token(self) -> None:
        assert placeholder("etcd", "conf") == "$etcdconf"


class TestSubstitutionEngine:
    """Tests for rendering with both resolved maps."""

    def test_render_bins_and_confs(self) -> None:
        engine = SubstitutionEngine(
            {"kubelet": "hyperkube kubelet"},
            {"kubelet": "/etc/kubernetes/kubelet.conf"},
        )

        rendered = engine.render("ps -ef | grep $kubeletbin; stat -c %a $kubeletconf")

        assert rendered == (
            "ps -ef | grep 'hyperkube kubelet'; stat -c %a /etc/kubernetes/kubelet.conf"
        )

    def test_apply(self) -> None:
        assert SubstitutionEngine.apply("$etcdconf", {"etcd": "/etc/etcd.conf"}, "conf") == (
            "/etc/etcd.conf"
        )

    def test_engine_copies_maps(self) -> None:
        binaries = {"kubelet": "kubelet"}
        engine = SubstitutionEngine(binaries, {})
        binaries["kubelet"] = "changed"

        assert engine.render("$kubeletbin") == "kubelet"
