"""
라이선스 추가 PR 생성 워크플로 테스트
"""

from unittest.mock import Mock, call, patch

import pytest

from api.github_rest import ApiError, GithubOrgClient, NetworkError, ParseError
from scripts.license_admin import add_missing_license
from scripts.license_admin.add_missing_license import (
    add_license_to_repos,
    get_commit_message,
)

LICENSE_TEXT = "Apache License\nVersion 2.0, January 2004\n"


def make_client(repos, licensed=()):
    """repos 중 licensed에 포함된 리포지토리만 라이선스가 있는 클라이언트 모킹"""
    client = Mock(spec=GithubOrgClient)
    client.get_license_template.return_value = LICENSE_TEXT
    client.list_repos.return_value = list(repos)
    client.has_license.side_effect = lambda repo: repo in licensed
    client.create_pull_request.side_effect = lambda repo, head, base, title: {
        "html_url": f"https://github.com/test-org/{repo}/pull/1"
    }
    return client


class TestAddLicenseToRepos:
    """add_license_to_repos 테스트"""

    def test_end_to_end_scenario(self):
        """repo2만 라이선스가 있으면 repo1, repo3에만 PR 생성"""
        client = make_client(["repo1", "repo2", "repo3"], licensed={"repo2"})
        message = "Added apache-2.0 license file."

        result = add_license_to_repos(client, "apache-2.0")

        client.get_license_template.assert_called_once_with("apache-2.0")
        assert client.has_license.call_count == 3
        assert client.create_branch.call_args_list == [
            call("repo1", "master", "add-missing-license"),
            call("repo3", "master", "add-missing-license"),
        ]
        assert client.create_file.call_args_list == [
            call("repo1", "add-missing-license", "LICENSE", LICENSE_TEXT, message),
            call("repo3", "add-missing-license", "LICENSE", LICENSE_TEXT, message),
        ]
        assert client.create_pull_request.call_args_list == [
            call("repo1", "add-missing-license", "master", message),
            call("repo3", "add-missing-license", "master", message),
        ]
        assert result == {
            "created": ["repo1", "repo3"],
            "skipped": ["repo2"],
            "failed": {},
        }

    def test_licensed_repos_are_untouched(self):
        client = make_client(["a", "b"], licensed={"a", "b"})

        result = add_license_to_repos(client, "mit")

        client.create_branch.assert_not_called()
        client.create_file.assert_not_called()
        client.create_pull_request.assert_not_called()
        assert result["skipped"] == ["a", "b"]

    def test_no_repos(self):
        client = make_client([])

        result = add_license_to_repos(client, "apache-2.0")

        client.has_license.assert_not_called()
        client.create_branch.assert_not_called()
        assert result == {"created": [], "skipped": [], "failed": {}}

    def test_remediation_steps_run_in_order(self):
        client = make_client(["repo1"])

        add_license_to_repos(client, "apache-2.0")

        called = [name for name, _, _ in client.method_calls]
        assert called == [
            "get_license_template",
            "list_repos",
            "has_license",
            "create_branch",
            "create_file",
            "create_pull_request",
        ]

    def test_branch_failure_does_not_stop_scan(self):
        """한 리포지토리의 브랜치 생성이 실패해도 다음 리포지토리는 처리"""
        client = make_client(["repo1", "repo2", "repo3"])

        def create_branch(repo, base, new):
            if repo == "repo1":
                raise ApiError(422, '{"message": "Reference already exists"}')

        client.create_branch.side_effect = create_branch

        result = add_license_to_repos(client, "apache-2.0")

        assert result["failed"] == {"repo1": "Reference already exists"}
        assert result["created"] == ["repo2", "repo3"]
        # 실패한 리포지토리는 파일/PR 생성으로 넘어가지 않음
        assert [c.args[0] for c in client.create_file.call_args_list] == [
            "repo2",
            "repo3",
        ]
        assert client.create_pull_request.call_count == 2

    def test_pull_request_failure_is_recorded(self):
        client = make_client(["repo1", "repo2"])
        client.create_pull_request.side_effect = [
            NetworkError("connection reset"),
            {"html_url": "https://github.com/test-org/repo2/pull/1"},
        ]

        result = add_license_to_repos(client, "apache-2.0")

        assert result["failed"] == {"repo1": "connection reset"}
        assert result["created"] == ["repo2"]

    def test_license_check_failure_is_isolated(self):
        client = make_client(["repo1", "repo2"])

        def has_license(repo):
            if repo == "repo1":
                raise ApiError(500, "Server Error")
            return False

        client.has_license.side_effect = has_license

        result = add_license_to_repos(client, "apache-2.0")

        assert "repo1" in result["failed"]
        assert result["created"] == ["repo2"]
        client.create_branch.assert_called_once_with(
            "repo2", "master", "add-missing-license"
        )

    def test_template_failure_is_fatal(self):
        client = make_client(["repo1"])
        client.get_license_template.side_effect = ParseError("no body")

        with pytest.raises(ParseError):
            add_license_to_repos(client, "apache-2.0")

        client.list_repos.assert_not_called()

    def test_listing_failure_is_fatal(self):
        client = make_client([])
        client.list_repos.side_effect = NetworkError("DNS failure")

        with pytest.raises(NetworkError):
            add_license_to_repos(client, "apache-2.0")

    def test_dry_run_makes_no_changes(self):
        client = make_client(["repo1", "repo2"], licensed={"repo2"})

        result = add_license_to_repos(client, "apache-2.0", dry_run=True)

        client.create_branch.assert_not_called()
        client.create_file.assert_not_called()
        client.create_pull_request.assert_not_called()
        assert result["created"] == ["repo1"]
        assert result["skipped"] == ["repo2"]

    def test_custom_branches_and_path(self):
        client = make_client(["repo1"])

        add_license_to_repos(
            client,
            "mit",
            base_branch="main",
            branch_name="license/mit",
            license_path="LICENSE.txt",
        )

        client.create_branch.assert_called_once_with("repo1", "main", "license/mit")
        client.create_file.assert_called_once_with(
            "repo1", "license/mit", "LICENSE.txt", LICENSE_TEXT, "Added mit license file."
        )
        client.create_pull_request.assert_called_once_with(
            "repo1", "license/mit", "main", "Added mit license file."
        )

    def test_commit_message(self):
        assert get_commit_message("apache-2.0") == "Added apache-2.0 license file."


class TestMain:
    """명령행 실행 테스트"""

    @patch("scripts.license_admin.add_missing_license.get_github_client")
    def test_runs_with_positional_arguments(self, mock_get_client, capsys):
        client = make_client(["repo1", "repo2"], licensed={"repo2"})
        mock_get_client.return_value = client

        exit_code = add_missing_license.main(["octocat", "ghp_secret", "test-org"])

        assert exit_code == 0
        mock_get_client.assert_called_once_with(
            "octocat", "ghp_secret", "test-org", timeout=None
        )
        client.get_license_template.assert_called_once_with("apache-2.0")
        client.create_repo.assert_not_called()
        out = capsys.readouterr().out
        assert "[SKIP] repo2" in out
        assert "[SUCCESS] repo1" in out
        assert "완료: 성공 1, 스킵 1, 오류 0" in out

    @patch("scripts.license_admin.add_missing_license.get_github_client")
    def test_populates_sample_repos(self, mock_get_client):
        client = make_client([])
        mock_get_client.return_value = client

        exit_code = add_missing_license.main(
            ["octocat", "ghp_secret", "test-org", "mit", "TRUE"]
        )

        assert exit_code == 0
        assert client.create_repo.call_args_list == [
            call("repo1", None),
            call("repo2", "mit"),
            call("repo3", None),
        ]
        client.get_license_template.assert_called_once_with("mit")

    @patch("scripts.license_admin.add_missing_license.get_github_client")
    def test_fatal_error_returns_non_zero(self, mock_get_client, capsys):
        client = make_client([])
        client.get_license_template.side_effect = ApiError(404, "Not Found")
        mock_get_client.return_value = client

        exit_code = add_missing_license.main(["octocat", "ghp_secret", "test-org"])

        assert exit_code == 1
        assert "[ERROR]" in capsys.readouterr().err

    @patch("scripts.license_admin.add_missing_license.get_github_client")
    def test_per_repo_failure_keeps_zero_exit(self, mock_get_client):
        client = make_client(["repo1"])
        client.create_file.side_effect = ApiError(409, "Conflict")
        mock_get_client.return_value = client

        assert add_missing_license.main(["octocat", "ghp_secret", "test-org"]) == 0

    def test_missing_arguments_print_usage(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            add_missing_license.main(["octocat", "ghp_secret"])

        assert exc_info.value.code != 0
        assert "usage" in capsys.readouterr().err

    @patch("scripts.license_admin.add_missing_license.get_github_client")
    def test_credentials_from_environment(self, mock_get_client, monkeypatch):
        monkeypatch.setenv("GITHUB_USERNAME", "env-user")
        monkeypatch.setenv("GITHUB_PASSWORD", "ghp_env")
        monkeypatch.setenv("GITHUB_ORG_NAME", "env-org")
        mock_get_client.return_value = make_client([])

        assert add_missing_license.main(["--dry-run"]) == 0
        mock_get_client.assert_called_once_with(
            "env-user", "ghp_env", "env-org", timeout=None
        )
