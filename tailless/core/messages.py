"""User-facing message constants (Korean)."""

# Generic
INVALID_INPUT = "잘못된 입력값입니다."
UNAUTHORIZED = "인증되지 않은 요청입니다."
FORBIDDEN = "권한이 없습니다."
UNEXPECTED_ERROR = "예기치 못한 오류가 발생했습니다."

# Auth
SESSION_CREATED = "로그인되었습니다."
SESSION_DELETED = "로그아웃되었습니다."
SIGNIN_DISABLED = "로그인이 설정되지 않았습니다."
USER_AUTHORIZED = "사용자 정보를 조회했습니다."

# Users
USER_ID_REQUIRED = "사용자 ID가 필요합니다."
USER_NOT_FOUND = "사용자를 찾을 수 없습니다."
USER_FETCHED = "사용자 정보를 성공적으로 조회했습니다."
USERS_FETCHED = "사용자 목록을 성공적으로 조회했습니다."

# Spaces
SPACE_NOT_FOUND = "Space를 찾을 수 없습니다."
SPACE_EXISTS = "이미 존재하는 Space입니다."
SPACE_CREATED = "Space가 성공적으로 생성되었습니다."
SPACE_FETCHED = "Space를 성공적으로 조회했습니다."
SPACES_FETCHED = "Space 목록을 성공적으로 조회했습니다."
SPACE_UPDATED = "Space가 성공적으로 업데이트되었습니다."
SPACE_DELETED = "Space가 성공적으로 삭제되었습니다."
SPACE_NEEDS_CONTRIBUTOR = "Space에는 최소 한 명의 Contributor가 필요합니다."

# Moments
MOMENT_NOT_FOUND = "Moment를 찾을 수 없습니다."
MOMENT_CREATED = "Moment가 성공적으로 생성되었습니다."
MOMENT_FETCHED = "Moment를 성공적으로 조회했습니다."
MOMENTS_FETCHED = "Moment 목록을 성공적으로 조회했습니다."
MOMENT_UPDATED = "Moment가 성공적으로 업데이트되었습니다."
MOMENT_DELETED = "Moment가 성공적으로 삭제되었습니다."

# Space <-> Moment membership
MOMENT_ALREADY_IN_SPACE = "이미 추가된 Moment입니다."
MOMENT_NOT_IN_SPACE = "존재하지 않는 Moment입니다."
MOMENT_ADDED_TO_SPACE = "Moment가 성공적으로 추가되었습니다."
MOMENT_REMOVED_FROM_SPACE = "Moment가 성공적으로 제거되었습니다."

# Contributors
CONTRIBUTOR_ONLY_CAN_ADD = "Contributor만 다른 사용자를 추가할 수 있습니다."
CONTRIBUTOR_USER_MISSING = "존재하지 않는 사용자입니다."
CONTRIBUTOR_EXISTS = "해당 사용자는 이미 Contributor로 등록되어 있습니다."
CONTRIBUTOR_ADDED = "새로운 Contributor가 성공적으로 추가되었습니다."
NOT_A_CONTRIBUTOR = "Contributor가 아닙니다."
LAST_CONTRIBUTOR = "마지막 Contributor는 제거할 수 없습니다."
CONTRIBUTOR_REMOVED = "Contributor에서 성공적으로 제거되었습니다."
CONTRIBUTOR_REMOVE_SELF_ONLY = "자기 자신만 Contributor에서 제거할 수 있습니다."

# Tags
TAGS_FORBIDDEN = "태그를 수정할 권한이 없습니다."
TAGS_ADDED = "태그가 성공적으로 추가되었습니다."
TAGS_DELETED = "태그가 성공적으로 삭제되었습니다."
TAGS_ALL_DELETED = "모든 태그가 성공적으로 삭제되었습니다."

# AI
AI_TEXT_FAILED = "AI 텍스트 생성에 실패했습니다."
AI_KEYWORDS_FAILED = "AI 키워드 추출에 실패했습니다."
AI_TAGS_FAILED = "AI 태그 생성에 실패했습니다."
AI_SIMILARITY_FAILED = "AI 유사도 계산에 실패했습니다."
AI_DISABLED = "AI 기능이 비활성화되어 있습니다."
AI_BLOCK_BUSY = "이미 AI 작업이 진행 중인 블록입니다."
AI_BLOCK_NOT_FOUND = "블록을 찾을 수 없습니다."
SPACES_FETCH_FAILED = "Space 목록을 가져오는데 실패했습니다"
