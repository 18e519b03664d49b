"""
GitHub Organization 라이선스 관리 스크립트 모음

이 패키지는 Organization의 리포지토리 중 라이선스 파일이 없는 곳에 라이선스 추가 PR을 생성합니다.

스크립트 목록:
- add_missing_license.py: 라이선스가 없는 모든 리포지토리에 LICENSE 추가 PR 생성
- cleanup_sample_repos.py: 테스트용으로 만든 리포지토리 삭제

사용 전 환경변수 (명령행 인자로도 전달 가능):
- GITHUB_USERNAME: GitHub 사용자 이름
- GITHUB_PASSWORD: 비밀번호 또는 Personal Access Token
- GITHUB_ORG_NAME: 대상 Organization 이름
"""
