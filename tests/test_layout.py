"""미리보기 뷰포트 계산 테스트"""

from facemesh_viewer.ui.layout import PREVIEW_BORDER, preview_viewport


def test_viewport_excludes_border():
    assert preview_viewport(800, 600) == (800 - 2 * PREVIEW_BORDER, 600 - 2 * PREVIEW_BORDER)
    assert preview_viewport(800, 600, border=0) == (800, 600)


def test_viewport_is_stable_across_loads():
    # 같은 프레임 크기면 몇 번을 읽어도 뷰포트가 커지지 않음
    viewports = {preview_viewport(640, 480) for _ in range(5)}
    assert viewports == {(636, 476)}


def test_unmapped_frame_has_no_viewport():
    # 배치 전 winfo_width()/winfo_height()는 1
    assert preview_viewport(1, 1) is None
    assert preview_viewport(5, 400) is None
