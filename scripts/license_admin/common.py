"""
라이선스 관리 스크립트 공통 유틸리티 모듈

명령행 인자와 환경변수(.env)에서 인증 정보를 읽어 GithubOrgClient를 생성합니다.
"""
import argparse
import os
import sys

from dotenv import load_dotenv

from api.github_rest import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, GithubOrgClient

# 프로젝트 루트의 .env 파일 로드
load_dotenv()

DEFAULT_LICENSE_NAME = "apache-2.0"
BASE_BRANCH = "master"
FEATURE_BRANCH = "add-missing-license"
LICENSE_PATH = "LICENSE"


def add_credential_arguments(parser: argparse.ArgumentParser) -> None:
    """
    USERNAME PASSWORD ORGANIZATION 위치 인자를 파서에 추가하는 함수

    생략한 값은 GITHUB_USERNAME, GITHUB_PASSWORD, GITHUB_ORG_NAME 환경변수로 채웁니다.

    Args:
        parser: 인자를 추가할 ArgumentParser
    """
    parser.add_argument("username", nargs="?", help="GitHub 사용자 이름")
    parser.add_argument("password", nargs="?", help="비밀번호 또는 Personal Access Token")
    parser.add_argument("organization", nargs="?", help="대상 Organization 이름")
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help=f"요청 타임아웃(초) (기본값: GITHUB_API_TIMEOUT 또는 {DEFAULT_TIMEOUT})",
    )


def resolve_credentials(
    parser: argparse.ArgumentParser, args: argparse.Namespace
) -> tuple[str, str, str]:
    """
    인자와 환경변수에서 인증 정보를 결정하는 함수

    세 값 중 하나라도 없으면 사용법을 출력하고 종료합니다 (종료 코드 2).

    Returns:
        tuple: (사용자 이름, 비밀번호, Organization 이름)
    """
    username = args.username or os.getenv("GITHUB_USERNAME")
    password = args.password or os.getenv("GITHUB_PASSWORD")
    org_name = args.organization or os.getenv("GITHUB_ORG_NAME")

    if not (username and password and org_name):
        parser.error(
            "최소 3개의 인자가 필요합니다 (USERNAME, PASSWORD, ORGANIZATION). "
            "GITHUB_USERNAME, GITHUB_PASSWORD, GITHUB_ORG_NAME 환경변수로도 지정할 수 있습니다."
        )
    return username, password, org_name


def get_timeout(value: float | None = None) -> float | None:
    """
    요청 타임아웃을 결정하는 함수

    Args:
        value: 명령행에서 지정한 값 (None이면 환경변수 사용)

    Returns:
        float | None: 타임아웃(초). 0 이하이면 None (타임아웃 없음)

    Raises:
        ValueError: GITHUB_API_TIMEOUT 값이 숫자가 아닌 경우
    """
    if value is None:
        raw = os.getenv("GITHUB_API_TIMEOUT")
        if not raw:
            return DEFAULT_TIMEOUT
        try:
            value = float(raw)
        except ValueError as e:
            raise ValueError(
                f"GITHUB_API_TIMEOUT 환경변수 값이 올바르지 않습니다: {raw}"
            ) from e

    return value if value > 0 else None


def get_github_client(
    username: str,
    password: str,
    org_name: str,
    timeout: float | None = None,
    allow_delete: bool = False,
) -> GithubOrgClient:
    """
    GitHub 클라이언트를 생성하는 함수

    Args:
        username: GitHub 사용자 이름
        password: 비밀번호 또는 토큰
        org_name: Organization 이름
        timeout: 요청 타임아웃(초)
        allow_delete: 리포지토리 삭제 허용 여부 (정리 스크립트에서만 True)

    Returns:
        GithubOrgClient: 클라이언트 인스턴스
    """
    # 비밀번호 Basic 인증은 GitHub에서 더 이상 지원하지 않으므로 토큰 사용을 권장
    if not (password.startswith("ghp_") or password.startswith("github_pat_")):
        print(
            "경고: 비밀번호가 GitHub 토큰 형식이 아닙니다. "
            "Personal Access Token 또는 Fine-grained Token 사용을 권장합니다.",
            file=sys.stderr,
        )

    return GithubOrgClient(
        username,
        password,
        org_name,
        base_url=os.getenv("GITHUB_API_BASE_URL") or DEFAULT_BASE_URL,
        timeout=get_timeout(timeout),
        allow_delete=allow_delete,
    )


def parse_bool(value: str | None) -> bool:
    """
    "true"(대소문자 무시)만 True로 해석하는 함수
    """
    return value is not None and value.strip().lower() == "true"
