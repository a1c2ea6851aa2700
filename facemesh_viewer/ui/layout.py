"""미리보기 영역 크기 계산"""

from typing import Optional, Tuple

# 테두리(sunken) 두께 (px)
PREVIEW_BORDER = 2


def preview_viewport(
    frame_width: int,
    frame_height: int,
    border: int = PREVIEW_BORDER
) -> Optional[Tuple[int, int]]:
    """
    미리보기 프레임의 내부 크기 (다운스케일 기준 뷰포트)

    Args:
        frame_width: winfo_width() 값
        frame_height: winfo_height() 값
        border: 프레임 테두리 두께

    Returns:
        (width, height) 또는 아직 배치되지 않은 경우 None
    """
    width = frame_width - 2 * border
    height = frame_height - 2 * border
    if width <= 1 or height <= 1:
        return None
    return width, height
