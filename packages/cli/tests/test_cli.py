"""Tests for the CLI entry point."""

import json
from unittest.mock import MagicMock

from click.testing import CliRunner
from github import GithubException

from prscribe_cli.cli import main
from prscribe_core.errors import MissingPlatformDataError
from prscribe_core.pipeline import PullRequestResult
from prscribe_core.summarize_release import ReleaseResult


def _make_config(model="openai", openai_key="sk", anthropic_key=None):
    return {
        "github_token": "tok",
        "model": model,
        "model_name": None,
        "anthropic_api_key": anthropic_key,
        "openai_api_key": openai_key,
        "ignore_files": [],
        "include_files": [],
        "server_url": "https://github.com",
        "api_url": None,
    }


def _patch_common(mocker, config=None, token="tok"):
    """Patch config loading, token resolution and client construction."""
    cfg = config or _make_config()
    load = mocker.patch("prscribe_core.config.load_config", return_value=cfg)
    mocker.patch("prscribe_cli.auth.resolve_github_token", return_value=token)
    host = MagicMock()
    mocker.patch("prscribe_core.gh.host.get_host", return_value=host)
    generator = MagicMock()
    mocker.patch("prscribe_core.pipeline.get_generator", return_value=generator)
    return load, host, generator


class TestCLIValidation:
    def test_missing_github_token(self, mocker):
        _patch_common(mocker, token=None)

        result = CliRunner().invoke(main, ["pr", "--repo", "owner/repo", "--pr", "1"])
        assert result.exit_code != 0
        assert "GITHUB_TOKEN" in result.output

    def test_missing_openai_key(self, mocker):
        _patch_common(mocker, config=_make_config(openai_key=None))

        result = CliRunner().invoke(main, ["pr", "--repo", "owner/repo", "--pr", "1"])
        assert result.exit_code != 0
        assert "OPENAI_API_KEY" in result.output

    def test_missing_anthropic_key(self, mocker):
        _patch_common(mocker, config=_make_config(model="anthropic"))

        result = CliRunner().invoke(main, ["release", "--repo", "owner/repo", "--tag", "v1"])
        assert result.exit_code != 0
        assert "ANTHROPIC_API_KEY" in result.output

    def test_pr_number_must_be_int(self):
        result = CliRunner().invoke(main, ["pr", "--repo", "owner/repo", "--pr", "abc"])
        assert result.exit_code == 2


class TestPrCommand:
    def test_dispatches_with_overrides(self, mocker):
        load, host, generator = _patch_common(mocker)
        run = mocker.patch(
            "prscribe_cli.commands.pr.summarize_pull_request",
            return_value=PullRequestResult(pr_number=42, head_sha="f" * 40),
        )

        result = CliRunner().invoke(
            main,
            ["pr", "--repo", "owner/repo", "--pr", "42", "--ignore", "*.lock", "--no-file-comments", "--description"],
        )

        assert result.exit_code == 0, result.output
        run.assert_called_once_with(host, generator, load.return_value, 42)
        overrides = load.call_args.kwargs["cli_overrides"]
        assert overrides["ignore_files"] == "*.lock"
        assert overrides["create_file_comments"] is False
        assert overrides["output_as_comment"] is False
        assert overrides["model"] is None
        assert "up to date" in result.output

    def test_config_path_option(self, mocker):
        load, _, _ = _patch_common(mocker)
        mocker.patch(
            "prscribe_cli.commands.pr.summarize_pull_request",
            return_value=PullRequestResult(pr_number=1, head_sha="f" * 40),
        )

        CliRunner().invoke(main, ["--config", "custom.yml", "pr", "--repo", "o/r", "--pr", "1"])

        assert load.call_args.args[0] == "custom.yml"

    def test_unexpected_error_exits_non_zero(self, mocker):
        _patch_common(mocker)
        mocker.patch("prscribe_cli.commands.pr.summarize_pull_request", side_effect=RuntimeError("boom"))

        result = CliRunner().invoke(main, ["pr", "--repo", "owner/repo", "--pr", "1"])
        assert result.exit_code == 1

    def test_missing_platform_data_exits_non_zero(self, mocker):
        _patch_common(mocker)
        mocker.patch(
            "prscribe_cli.commands.pr.summarize_pull_request",
            side_effect=MissingPlatformDataError("Commit abc was returned without a file list"),
        )

        result = CliRunner().invoke(main, ["pr", "--repo", "owner/repo", "--pr", "1"])
        assert result.exit_code == 1

    def test_github_error_exits_non_zero(self, mocker):
        _patch_common(mocker)
        mocker.patch(
            "prscribe_cli.commands.pr.summarize_pull_request",
            side_effect=GithubException(404, {"message": "Not Found"}),
        )

        result = CliRunner().invoke(main, ["pr", "--repo", "owner/repo", "--pr", "1"])
        assert result.exit_code == 1


class TestReleaseCommand:
    def test_no_update_and_force(self, mocker):
        load, host, generator = _patch_common(mocker)
        run = mocker.patch(
            "prscribe_cli.commands.release.summarize_release",
            return_value=ReleaseResult(tag="v1.2.0", rollup="* things changed"),
        )

        result = CliRunner().invoke(
            main, ["release", "--repo", "o/r", "--tag", "v1.2.0", "--no-update", "--force", "--images"]
        )

        assert result.exit_code == 0, result.output
        run.assert_called_once_with(host, generator, load.return_value, "v1.2.0", force=True)
        assert load.call_args.kwargs["cli_overrides"]["update_release"] is False
        assert load.call_args.kwargs["cli_overrides"]["release_images"] is True
        assert "* things changed" in result.output


class TestActionCommand:
    def _event(self, tmp_path, monkeypatch, name, payload):
        path = tmp_path / "event.json"
        path.write_text(json.dumps(payload))
        monkeypatch.setenv("GITHUB_EVENT_NAME", name)
        monkeypatch.setenv("GITHUB_EVENT_PATH", str(path))
        monkeypatch.setenv("GITHUB_REPOSITORY", "octo/repo")

    def test_pull_request_event(self, mocker, tmp_path, monkeypatch):
        self._event(tmp_path, monkeypatch, "pull_request", {"number": 5, "pull_request": {"number": 5}})
        run = mocker.patch("prscribe_cli.commands.action.run_pull_request")

        result = CliRunner().invoke(main, ["action"])

        assert result.exit_code == 0, result.output
        run.assert_called_once_with(".prscribe.yml", {}, "octo/repo", 5)

    def test_release_event(self, mocker, tmp_path, monkeypatch):
        self._event(tmp_path, monkeypatch, "release", {"release": {"tag_name": "v2.0.0"}})
        run = mocker.patch("prscribe_cli.commands.action.run_release")

        result = CliRunner().invoke(main, ["action"])

        assert result.exit_code == 0, result.output
        run.assert_called_once_with(".prscribe.yml", {}, "octo/repo", "v2.0.0")

    def test_unsupported_event_exits_non_zero(self, mocker, tmp_path, monkeypatch):
        self._event(tmp_path, monkeypatch, "push", {})
        run = mocker.patch("prscribe_cli.commands.action.run_pull_request")

        result = CliRunner().invoke(main, ["action"])

        assert result.exit_code == 1
        run.assert_not_called()
