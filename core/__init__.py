# core/__init__.py
"""
core - tgcp 엔진

터미널 UI와 무관한 탐색/디스패치 엔진 전체를 포함하는 최상위 패키지입니다.
리소스 카탈로그, GCP REST 디스패치, 인증, 탐색 상태 머신을 통합합니다.

아키텍처:
    core/
    ├── catalog/        # 리소스 카탈로그 (JSON 정의 로드, 값 추출)
    ├── gcp/            # GCP REST 클라이언트, URL 보간, 목록/액션 디스패치
    │   └── auth/       # 액세스 토큰 (환경 변수, ADC, 메타데이터 서버)
    ├── navigation/     # 탐색 상태 머신, 필터, 명령어 해석기
    ├── config.py       # 상수 및 사용자 설정 (YAML)
    └── exceptions.py   # 통합 예외 계층

Usage:
    from core.catalog import Catalog
    from core.gcp import GcpClient
    from core.navigation import Navigator

    catalog = Catalog.load_builtin()
    client = GcpClient(project="my-project", zone="us-central1-a")
    nav = Navigator(catalog, client)
    nav.refresh()

    # 예외 처리
    from core.exceptions import TgcpError, is_permission_denied
    try:
        nav.navigate_to_resource("buckets")
    except TgcpError as e:
        if is_permission_denied(e):
            print("권한이 없습니다")
"""
