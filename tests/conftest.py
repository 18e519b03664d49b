"""pytest 설정 파일"""

import sys
from pathlib import Path

import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

GITHUB_ENV_VARS = [
    "GITHUB_USERNAME",
    "GITHUB_PASSWORD",
    "GITHUB_ORG_NAME",
    "GITHUB_API_TIMEOUT",
    "GITHUB_API_BASE_URL",
]


@pytest.fixture(autouse=True)
def clear_github_env(monkeypatch):
    """.env에서 읽어온 GitHub 설정이 테스트에 영향을 주지 않도록 제거"""
    for name in GITHUB_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
