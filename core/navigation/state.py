"""
core/navigation/state.py - 탐색 상태 타입

- Mode: 화면 모드 (상태 머신의 상태 태그)
- PendingAction: 트리거되어 아직 소비되지 않은 액션
- ParentContext: 내비게이션 스택의 한 프레임
- DescribeState: Describe 모드 전용 데이터 (항목 스냅샷 + 스크롤)
- Picker: Projects/Zones 모드의 선택 목록
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional


class Mode(Enum):
    """화면 모드"""

    NORMAL = "normal"
    COMMAND = "command"
    HELP = "help"
    CONFIRM = "confirm"
    WARNING = "warning"
    PROJECTS = "projects"
    ZONES = "zones"
    DESCRIBE = "describe"


@dataclass
class PendingAction:
    """트리거된 액션 (확인 대화상자에서 정확히 한 번 소비됨)

    Attributes:
        message: 확인 메시지 ({name}/{id} 치환 완료)
        destructive: 파괴적 액션 여부
        selected_yes: 현재 선택 (확인이 필요한 액션은 False로 시작)
        action_index: 리소스 내 액션 인덱스
        resource_id: 대상 항목의 id 필드 값
    """

    message: str
    destructive: bool
    selected_yes: bool
    action_index: int
    resource_id: str

    def toggle(self) -> None:
        self.selected_yes = not self.selected_yes


@dataclass(frozen=True)
class ParentContext:
    """드릴다운 시점의 부모 정보

    Attributes:
        resource_key: 출발한 리소스 키 (목적지가 아님)
        item: 드릴다운 시 선택돼 있던 항목의 스냅샷
        display_name: 브레드크럼 표시용 이름
    """

    resource_key: str
    item: Any
    display_name: str

    @property
    def label(self) -> str:
        return f"{self.resource_key}:{self.display_name}"


@dataclass
class DescribeState:
    """Describe 모드 데이터"""

    item: Any
    scroll: int = 0


@dataclass
class Picker:
    """단일 선택 목록 (프로젝트/존)"""

    options: List[str] = field(default_factory=list)
    selected: int = 0

    def current(self) -> Optional[str]:
        if 0 <= self.selected < len(self.options):
            return self.options[self.selected]
        return None

    def select_value(self, value: Optional[str]) -> None:
        """값이 목록에 있으면 그 위치를, 없으면 0을 선택"""
        self.selected = self.options.index(value) if value in self.options else 0
