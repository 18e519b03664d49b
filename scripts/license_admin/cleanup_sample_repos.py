"""
add_missing_license.py의 POPULATE_TEST_REPOS로 만든 테스트 리포지토리를 삭제하는 스크립트

리포지토리 삭제는 되돌릴 수 없으므로 --yes 없이 실행하면 삭제 대상만 출력합니다.

사용법:
    python scripts/license_admin/cleanup_sample_repos.py USERNAME PASSWORD ORGANIZATION [--yes]
"""

import argparse
import os
import sys

# 프로젝트 루트를 Python 경로에 추가
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from scripts.license_admin.common import (
    DEFAULT_LICENSE_NAME,
    add_credential_arguments,
    get_github_client,
    resolve_credentials,
)
from scripts.license_admin.sample_repos import (
    cleanup_sample_repos,
    get_default_sample_repos,
)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="테스트용으로 생성한 리포지토리(repo1, repo2, repo3)를 삭제합니다."
    )
    add_credential_arguments(parser)
    parser.add_argument(
        "--yes",
        action="store_true",
        help="실제로 삭제 (지정하지 않으면 삭제 대상만 출력)",
    )
    args = parser.parse_args(argv)

    username, password, org_name = resolve_credentials(parser, args)
    client = get_github_client(
        username, password, org_name, timeout=args.timeout, allow_delete=args.yes
    )

    print(f"Organization: {org_name}")
    if not args.yes:
        print("--yes가 지정되지 않아 삭제 대상만 출력합니다.")
    print("-" * 50)

    success, error = cleanup_sample_repos(
        client, get_default_sample_repos(DEFAULT_LICENSE_NAME), dry_run=not args.yes
    )

    print("-" * 50)
    print(f"완료: 성공 {success}, 오류 {error}")
    return 1 if error else 0


if __name__ == "__main__":
    sys.exit(main())
