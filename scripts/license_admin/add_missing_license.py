"""
GitHub Organization에서 라이선스가 없는 리포지토리에 LICENSE 추가 PR을 생성하는 스크립트

사용법:
    python scripts/license_admin/add_missing_license.py USERNAME PASSWORD ORGANIZATION \
        [LICENSE_NAME] [POPULATE_TEST_REPOS] [--dry-run]

인자:
    LICENSE_NAME: 추가할 라이선스 템플릿 (기본값: apache-2.0)
    POPULATE_TEST_REPOS: true이면 실행 전에 테스트 리포지토리(repo1, repo2, repo3) 생성

옵션:
    --dry-run: 실제 변경 없이 어떤 리포지토리에 PR이 생성될지 확인
    --base-branch: PR 대상 브랜치 (기본값: master)
    --branch: 새로 만들 브랜치 이름 (기본값: add-missing-license)
    --path: 라이선스 파일 경로 (기본값: LICENSE)

전제:
    - 사용자는 Organization에서 브랜치/커밋/PR을 생성할 권한이 있어야 합니다.
    - 각 리포지토리의 기준 브랜치에 최소 1개의 커밋이 있어야 합니다.
"""

import argparse
import os
import sys

# 프로젝트 루트를 Python 경로에 추가
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from api.github_rest import GithubApiError, GithubOrgClient
from scripts.license_admin.common import (
    BASE_BRANCH,
    DEFAULT_LICENSE_NAME,
    FEATURE_BRANCH,
    LICENSE_PATH,
    add_credential_arguments,
    get_github_client,
    parse_bool,
    resolve_credentials,
)
from scripts.license_admin.sample_repos import (
    get_default_sample_repos,
    populate_sample_repos,
)


def get_commit_message(license_name: str) -> str:
    """
    커밋 메시지(PR 제목으로도 사용)를 생성하는 함수
    """
    return f"Added {license_name} license file."


def add_license_to_repo(
    client: GithubOrgClient,
    repo_name: str,
    license_text: str,
    message: str,
    base_branch: str = BASE_BRANCH,
    branch_name: str = FEATURE_BRANCH,
    license_path: str = LICENSE_PATH,
) -> dict:
    """
    한 리포지토리에 브랜치 생성 → LICENSE 커밋 → PR 생성을 순서대로 수행하는 함수

    Args:
        client: GitHub 클라이언트
        repo_name: 리포지토리 이름
        license_text: 라이선스 본문
        message: 커밋 메시지이자 PR 제목
        base_branch: 기준 브랜치
        branch_name: 새로 만들 브랜치
        license_path: 라이선스 파일 경로

    Returns:
        dict: 생성된 PR 정보
    """
    client.create_branch(repo_name, base_branch, branch_name)
    client.create_file(repo_name, branch_name, license_path, license_text, message)
    return client.create_pull_request(repo_name, branch_name, base_branch, message)


def add_license_to_repos(
    client: GithubOrgClient,
    license_name: str = DEFAULT_LICENSE_NAME,
    base_branch: str = BASE_BRANCH,
    branch_name: str = FEATURE_BRANCH,
    license_path: str = LICENSE_PATH,
    dry_run: bool = False,
) -> dict:
    """
    Organization의 모든 리포지토리를 확인하고 라이선스가 없는 곳에 PR을 생성하는 함수

    라이선스 본문 조회와 리포지토리 목록 조회 실패는 그대로 전파합니다.
    리포지토리 단위 실패는 기록만 하고 다음 리포지토리로 넘어갑니다.

    Args:
        client: GitHub 클라이언트
        license_name: 라이선스 템플릿 이름
        base_branch: PR 대상 브랜치
        branch_name: 새로 만들 브랜치 이름
        license_path: 라이선스 파일 경로
        dry_run: dry-run 모드 여부

    Returns:
        dict: {"created": [...], "skipped": [...], "failed": {리포지토리: 오류 메시지}}
    """
    license_text = client.get_license_template(license_name)
    message = get_commit_message(license_name)
    repo_names = client.list_repos()

    result = {"created": [], "skipped": [], "failed": {}}

    for repo_name in repo_names:
        try:
            if client.has_license(repo_name):
                print(f"[SKIP] {repo_name}: 라이선스 이미 존재")
                result["skipped"].append(repo_name)
                continue

            if dry_run:
                print(f"[DRY-RUN] {repo_name}: 라이선스 추가 PR 생성 예정")
                result["created"].append(repo_name)
                continue

            pull_request = add_license_to_repo(
                client,
                repo_name,
                license_text,
                message,
                base_branch=base_branch,
                branch_name=branch_name,
                license_path=license_path,
            )
            pr_url = pull_request.get("html_url", "") if pull_request else ""
            print(f"[SUCCESS] {repo_name}: PR 생성 완료 {pr_url}".rstrip())
            result["created"].append(repo_name)

        except GithubApiError as e:
            error_msg = getattr(e, "message", None) or str(e)
            print(f"[ERROR] {repo_name}: {error_msg}")
            result["failed"][repo_name] = error_msg

    return result


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Organization에서 라이선스가 없는 리포지토리에 LICENSE 추가 PR을 생성합니다."
    )
    add_credential_arguments(parser)
    parser.add_argument(
        "license_name",
        nargs="?",
        default=DEFAULT_LICENSE_NAME,
        help=f"추가할 라이선스 템플릿 (기본값: {DEFAULT_LICENSE_NAME})",
    )
    parser.add_argument(
        "populate_test_repos",
        nargs="?",
        default="false",
        help="true이면 실행 전에 테스트 리포지토리 생성 (기본값: false)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="실제 변경 없이 어떤 리포지토리에 PR이 생성될지 확인",
    )
    parser.add_argument(
        "--base-branch",
        default=BASE_BRANCH,
        help=f"PR 대상 브랜치 (기본값: {BASE_BRANCH})",
    )
    parser.add_argument(
        "--branch",
        default=FEATURE_BRANCH,
        help=f"새로 만들 브랜치 이름 (기본값: {FEATURE_BRANCH})",
    )
    parser.add_argument(
        "--path",
        default=LICENSE_PATH,
        help=f"라이선스 파일 경로 (기본값: {LICENSE_PATH})",
    )
    args = parser.parse_args(argv)

    username, password, org_name = resolve_credentials(parser, args)

    # GitHub 클라이언트 초기화
    client = get_github_client(username, password, org_name, timeout=args.timeout)

    print(f"Organization: {org_name} (사용자: {username})")
    print(f"라이선스: {args.license_name}")
    print("-" * 50)

    try:
        if parse_bool(args.populate_test_repos):
            populate_sample_repos(client, get_default_sample_repos(args.license_name))

        result = add_license_to_repos(
            client,
            license_name=args.license_name,
            base_branch=args.base_branch,
            branch_name=args.branch,
            license_path=args.path,
            dry_run=args.dry_run,
        )
    except GithubApiError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    print("-" * 50)
    print(
        f"완료: 성공 {len(result['created'])}, "
        f"스킵 {len(result['skipped'])}, 오류 {len(result['failed'])}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
