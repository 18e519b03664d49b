"""
테스트용 리포지토리 생성/삭제 함수

라이선스가 있는 리포지토리와 없는 리포지토리를 Organization에 만들어
add_missing_license.py의 동작을 직접 확인할 수 있게 합니다.
"""

from api.github_rest import GithubApiError, GithubOrgClient

# (리포지토리 이름, 라이선스 템플릿). None이면 라이선스 없이 생성
SampleRepo = tuple[str, str | None]


def get_default_sample_repos(license_name: str) -> list[SampleRepo]:
    """
    기본 테스트 리포지토리 목록을 반환하는 함수

    repo1, repo3은 라이선스 없이, repo2는 license_name 라이선스로 생성됩니다.

    Args:
        license_name: repo2에 붙일 라이선스 템플릿

    Returns:
        list: (리포지토리 이름, 라이선스 템플릿 또는 None) 목록
    """
    return [
        ("repo1", None),
        ("repo2", license_name),
        ("repo3", None),
    ]


def populate_sample_repos(
    client: GithubOrgClient, sample_repos: list[SampleRepo]
) -> None:
    """
    테스트 리포지토리를 생성하는 함수

    생성에 실패하면 예외를 그대로 전파합니다.

    Args:
        client: GitHub 클라이언트
        sample_repos: 생성할 (리포지토리 이름, 라이선스 템플릿) 목록
    """
    for repo_name, license_template in sample_repos:
        license_label = license_template or "없음"
        print(f"[CREATE] {repo_name}: 리포지토리 생성 (라이선스: {license_label})")
        client.create_repo(repo_name, license_template)


def cleanup_sample_repos(
    client: GithubOrgClient, sample_repos: list[SampleRepo], dry_run: bool = False
) -> tuple[int, int]:
    """
    테스트 리포지토리를 삭제하는 함수

    Args:
        client: allow_delete=True로 생성한 GitHub 클라이언트
        sample_repos: 삭제할 (리포지토리 이름, 라이선스 템플릿) 목록
        dry_run: True이면 삭제하지 않고 대상만 출력

    Returns:
        tuple: (성공 수, 오류 수)
    """
    success_count = 0
    error_count = 0

    for repo_name, _ in sample_repos:
        if dry_run:
            print(f"[DRY-RUN] {repo_name}: 삭제 예정")
            success_count += 1
            continue

        try:
            client.delete_repo(repo_name)
            print(f"[SUCCESS] {repo_name}: 삭제 완료")
            success_count += 1
        except GithubApiError as e:
            print(f"[ERROR] {repo_name}: {e}")
            error_count += 1

    return success_count, error_count
