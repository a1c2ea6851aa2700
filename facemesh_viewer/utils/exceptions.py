"""커스텀 예외 클래스 정의"""


class FaceMeshViewerException(Exception):
    """기본 예외 클래스"""
    pass


class ImageDecodeError(FaceMeshViewerException):
    """이미지 디코딩 실패 예외"""
    pass


class OrientationError(FaceMeshViewerException):
    """EXIF 방향 정보 읽기 실패 예외"""
    pass


class InvalidImageError(FaceMeshViewerException):
    """잘못된 이미지 입력 예외"""
    pass


class ConfigurationError(FaceMeshViewerException):
    """설정 오류 예외"""
    pass


class InferenceError(FaceMeshViewerException):
    """MediaPipe 추론 실패 예외"""
    pass
