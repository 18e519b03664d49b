"""
GitHub REST API 래퍼

Organization 단위로 리포지토리 목록 조회, 라이선스 확인, 브랜치/파일/PR 생성을 수행합니다.
PyGithub 대신 REST API를 직접 호출하여 요청 본문(특히 base64 인코딩)을 그대로 제어합니다.
인증은 사용자 이름 + 비밀번호(또는 토큰)를 사용하는 Basic 인증입니다.
"""

import base64
import json

import requests

DEFAULT_BASE_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 30


class GithubApiError(Exception):
    """GitHub API 클라이언트가 발생시키는 모든 예외의 기본 클래스"""


class NetworkError(GithubApiError):
    """DNS, 연결 실패, 타임아웃 등 전송 계층 오류"""


class ApiError(GithubApiError):
    """성공(2xx)이 아닌 HTTP 응답"""

    def __init__(self, status: int, body: str, url: str = ""):
        self.status = status
        self.body = body
        self.url = url
        super().__init__(f"HTTP {status} ({url}): {body}")

    @property
    def message(self) -> str:
        """
        응답 본문의 message 필드를 반환합니다. 없으면 본문 전체를 반환합니다.
        """
        try:
            data = json.loads(self.body)
        except ValueError:
            return self.body
        if isinstance(data, dict) and data.get("message"):
            return data["message"]
        return self.body


class AuthError(ApiError):
    """401/403 응답 (인증 실패 또는 권한 부족)"""


class ParseError(GithubApiError):
    """응답 본문이 JSON이 아니거나 필요한 필드가 없는 경우"""


class DeleteNotAllowedError(GithubApiError):
    """삭제가 허용되지 않은 클라이언트로 리포지토리 삭제를 시도한 경우"""


class GithubOrgClient:
    """
    하나의 Organization을 대상으로 동작하는 GitHub REST API 클라이언트

    모든 요청은 순차적으로 수행되며 응답을 받을 때까지 블록됩니다.
    페이지네이션, 재시도, rate limit 처리는 하지 않습니다.
    """

    def __init__(
        self,
        username: str,
        password: str,
        org: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float | None = DEFAULT_TIMEOUT,
        allow_delete: bool = False,
    ):
        """
        Args:
            username: GitHub 사용자 이름
            password: 비밀번호 또는 Personal Access Token
            org: 대상 Organization 이름
            base_url: API 루트 URL (기본값: https://api.github.com)
            timeout: 요청 타임아웃(초). None이면 requests 기본 동작을 따름
            allow_delete: True일 때만 delete_repo 호출을 허용
        """
        self._auth = (username, password)
        self.username = username
        self.org = org
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.allow_delete = allow_delete

    def get_headers(self) -> dict[str, str]:
        """
        GitHub API 요청에 사용할 헤더를 생성하는 함수

        Returns:
            dict: Accept와 API 버전 헤더가 포함된 딕셔너리
        """
        return {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def _request(
        self,
        method: str,
        path: str,
        payload: dict | None = None,
        authenticate: bool = True,
    ) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            return requests.request(
                method,
                url,
                headers=self.get_headers(),
                auth=self._auth if authenticate else None,
                json=payload,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"{method} {url} 요청 실패: {e}") from e

    def _call(
        self,
        method: str,
        path: str,
        payload: dict | None = None,
        authenticate: bool = True,
    ) -> requests.Response:
        """
        요청을 보내고 2xx가 아니면 ApiError(401/403이면 AuthError)를 발생시킵니다.
        """
        response = self._request(method, path, payload, authenticate)
        if not 200 <= response.status_code < 300:
            error_cls = AuthError if response.status_code in (401, 403) else ApiError
            raise error_cls(response.status_code, response.text, response.url)
        return response

    @staticmethod
    def _json(response: requests.Response):
        try:
            return response.json()
        except ValueError as e:
            raise ParseError(f"JSON 응답을 해석할 수 없습니다: {response.url}") from e

    def get_license_template(self, license_name: str) -> str:
        """
        GitHub 라이선스 API에서 라이선스 본문을 가져옵니다. 인증 없이 호출합니다.

        Args:
            license_name: 라이선스 템플릿 이름 (예: apache-2.0)

        Returns:
            str: 라이선스 본문

        Raises:
            ParseError: 응답에 body 필드가 없는 경우
        """
        data = self._json(
            self._call("GET", f"/licenses/{license_name}", authenticate=False)
        )
        body = data.get("body") if isinstance(data, dict) else None
        if not isinstance(body, str):
            raise ParseError(f"라이선스 '{license_name}' 응답에 body 필드가 없습니다.")
        return body

    def list_repos(self) -> list[str]:
        """
        Organization이 소유한 리포지토리 이름 목록을 가져옵니다.

        첫 번째 응답 페이지만 사용합니다.

        Returns:
            list[str]: 리포지토리 이름 목록
        """
        data = self._json(self._call("GET", f"/orgs/{self.org}/repos"))
        if not isinstance(data, list):
            raise ParseError(f"'{self.org}' 리포지토리 목록 응답이 배열이 아닙니다.")

        names = []
        for repo in data:
            name = repo.get("name") if isinstance(repo, dict) else None
            if not isinstance(name, str):
                raise ParseError("리포지토리 목록 항목에 name 필드가 없습니다.")
            names.append(name)
        return names

    def has_license(self, repo: str) -> bool:
        """
        리포지토리에 라이선스가 있는지 확인합니다.

        Args:
            repo: 리포지토리 이름

        Returns:
            bool: 라이선스가 있으면 True, 404이면 False

        Raises:
            ApiError: 404 이외의 실패 응답 (확인 자체가 실패한 경우)
        """
        try:
            self._call("GET", f"/repos/{self.org}/{repo}/license")
            return True
        except ApiError as e:
            if e.status == 404:
                return False
            raise

    def get_head_sha(self, repo: str, branch: str) -> str:
        """
        브랜치의 최신 커밋 SHA를 가져옵니다.

        Args:
            repo: 리포지토리 이름
            branch: 브랜치 이름

        Returns:
            str: 최신 커밋 SHA
        """
        data = self._json(self._call("GET", f"/repos/{self.org}/{repo}/branches/{branch}"))
        try:
            sha = data["commit"]["sha"]
        except (KeyError, TypeError) as e:
            raise ParseError(f"{repo}:{branch} 응답에 commit.sha가 없습니다.") from e
        if not isinstance(sha, str):
            raise ParseError(f"{repo}:{branch} 응답의 commit.sha가 문자열이 아닙니다.")
        return sha

    def create_branch(self, repo: str, base_branch: str, new_branch: str) -> dict:
        """
        base_branch의 최신 커밋에서 새 브랜치를 생성합니다.

        Args:
            repo: 리포지토리 이름
            base_branch: 기준 브랜치
            new_branch: 생성할 브랜치 이름

        Returns:
            dict: 생성된 ref 정보
        """
        sha = self.get_head_sha(repo, base_branch)
        payload = {"ref": f"refs/heads/{new_branch}", "sha": sha}
        response = self._call("POST", f"/repos/{self.org}/{repo}/git/refs", payload)
        return self._json(response)

    def create_file(
        self, repo: str, branch: str, path: str, content: str, message: str
    ) -> dict:
        """
        브랜치에 파일을 커밋합니다.

        Args:
            repo: 리포지토리 이름
            branch: 커밋할 브랜치 (새로 만든 브랜치도 가능)
            path: 리포지토리 루트 기준 파일 경로
            content: 파일 내용 (평문, 여기서 한 번만 base64 인코딩)
            message: 커밋 메시지

        Returns:
            dict: 생성된 content/commit 정보
        """
        payload = {
            "message": message,
            "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
            "branch": branch,
        }
        response = self._call("PUT", f"/repos/{self.org}/{repo}/contents/{path}", payload)
        return self._json(response)

    def create_pull_request(self, repo: str, head: str, base: str, title: str) -> dict:
        """
        head 브랜치를 base 브랜치로 병합하는 PR을 생성합니다.

        Returns:
            dict: 생성된 PR 정보 (html_url 포함)
        """
        payload = {"title": title, "head": head, "base": base}
        response = self._call("POST", f"/repos/{self.org}/{repo}/pulls", payload)
        return self._json(response)

    def create_repo(self, repo: str, license_template: str | None = None) -> dict:
        """
        Organization에 새 리포지토리를 생성합니다. README로 초기화됩니다.

        Args:
            repo: 리포지토리 이름
            license_template: 포함할 라이선스 템플릿 (None이면 라이선스 없이 생성)

        Returns:
            dict: 생성된 리포지토리 정보
        """
        payload = {"name": repo, "auto_init": True}
        if license_template is not None:
            payload["license_template"] = license_template

        response = self._call("POST", f"/orgs/{self.org}/repos", payload)
        return self._json(response)

    def delete_repo(self, repo: str) -> None:
        """
        리포지토리를 삭제합니다. 되돌릴 수 없습니다.

        Raises:
            DeleteNotAllowedError: allow_delete=True로 생성되지 않은 클라이언트인 경우
        """
        if not self.allow_delete:
            raise DeleteNotAllowedError(
                f"'{self.org}/{repo}' 삭제 거부: allow_delete=True로 생성한 클라이언트만 삭제할 수 있습니다."
            )
        self._call("DELETE", f"/repos/{self.org}/{repo}")
