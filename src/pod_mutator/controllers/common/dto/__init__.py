from .api_response_dto import ApiErrorResponseDto, ApiResponseDto

__all__ = [
    "ApiResponseDto",
    "ApiErrorResponseDto",
]
