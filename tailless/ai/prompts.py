"""Writer roles, system prompt assembly and the per-action prompt table."""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Role:
    name: str
    description: str


TRANSLATOR = Role(
    "전문 번역가",
    "정확하고 자연스러운 번역을 제공하며, 원문의 뉘앙스와 문화적 맥락을 충실히 반영합니다.",
)
WRITER = Role(
    "창의적인 작가",
    "독창적이고 매력적인 문체로 다양한 장르의 글을 작성하며, 독자의 흥미를 사로잡는 서사를 구축합니다.",
)
EDITOR = Role(
    "전문 에디터",
    "문장의 논리성과 가독성을 향상시키며, 전체적인 글의 구조와 흐름을 최적화합니다.",
)
PROOFREADER = Role(
    "교정 교열가",
    "맞춤법, 문법, 띄어쓰기를 꼼꼼히 검토하여 완성도 높은 텍스트를 만듭니다.",
)
COPYWRITER = Role(
    "카피라이터",
    "간결하고 임팩트 있는 문구로 핵심 메시지를 전달하며, 브랜드의 가치를 효과적으로 표현합니다.",
)
TECHNICAL_WRITER = Role(
    "기술 문서 작성자",
    "복잡한 기술적 내용을 명확하고 이해하기 쉽게 설명하며, 체계적인 문서를 작성합니다.",
)
JOURNALIST = Role(
    "저널리스트",
    "객관적인 시각으로 사실을 전달하며, 심층적인 취재를 통해 가치 있는 정보를 제공합니다.",
)
CONTENT_STRATEGIST = Role(
    "콘텐츠 전략가",
    "목적과 대상에 맞는 최적의 콘텐츠를 기획하고, 효과적인 전달 방식을 설계합니다.",
)
SCRIPTWRITER = Role(
    "시나리오 작가",
    "흥미로운 스토리와 생동감 있는 대사를 통해 몰입도 높은 극적 구조를 만듭니다.",
)
REVIEWER = Role(
    "전문 리뷰어",
    "객관적인 기준과 전문적인 식견을 바탕으로 깊이 있는 분석과 평가를 제공합니다.",
)

DEFAULT_REFINEMENTS = (
    "순수한 결과물만 반환해주세요.",
    "앞뒤 공백 및 개행은 제거해주세요.",
)


def build_system_prompt(
    role: Role,
    knowledge: Sequence[str] = (),
    refine: Sequence[str] = DEFAULT_REFINEMENTS,
) -> str:
    """Role sentence, then optional knowledge and post-processing blocks."""
    parts = [f"당신은 {role.name}입니다. {role.description}"]
    if knowledge:
        parts.append("당신은 이러한 배경 지식을 가지고 있습니다.\n\n" + "\n".join(knowledge))
    if refine:
        parts.append(
            "결과물을 반환하기 이전, 다음과 같은 후처리 작업이 필요합니다.\n\n" + "\n".join(refine)
        )
    return "\n\n".join(parts)


class AiAction(str, Enum):
    SPELLCHECK = "spellcheck"
    SUMMARIZE = "summarize"
    REWRITE = "rewrite"
    TRANSLATE = "translate"
    ELABORATE = "elaborate"
    TITLE_REFINEMENT = "title_refinement"
    CONTENT_REFINEMENT = "content_refinement"
    TAG_RECOMMENDATION = "tag_recommendation"


# action -> (role, user prompt template)
_ACTION_PROMPTS: dict[AiAction, tuple[Role, str]] = {
    AiAction.SPELLCHECK: (PROOFREADER, "다음 텍스트의 맞춤법을 교정해주세요:\n\n{content}"),
    AiAction.SUMMARIZE: (EDITOR, "다음 텍스트를 3-5문장으로 요약해주세요:\n\n{content}"),
    AiAction.REWRITE: (WRITER, "다음 텍스트를 다른 표현으로 다시 작성해주세요:\n\n{content}"),
    AiAction.TRANSLATE: (TRANSLATOR, "다음 한국어 텍스트를 영어로 번역해주세요:\n\n{content}"),
    AiAction.ELABORATE: (
        WRITER,
        "다음 텍스트를 더 자세하고 구체적으로 확장해서 작성해주세요:\n\n{content}",
    ),
    AiAction.TITLE_REFINEMENT: (
        WRITER,
        "다음 제목을 좀 더 다듬어주세요, 그리고 결과물만 반환해주세요:\n\n{content}",
    ),
    AiAction.CONTENT_REFINEMENT: (
        WRITER,
        "다음 내용을 좀 더 다듬어주세요, 결과물의 형태는 3줄 이내의 줄글이어야 합니다:\n\n{content}",
    ),
    AiAction.TAG_RECOMMENDATION: (
        WRITER,
        "다음 내용에 대한 태그를 추천해주세요, 이때, 결과물의 형태는 쉼표로 구분된 "
        "단순한 단어 형태의 문자열로 반환해주세요:\n\n{content}",
    ),
}


def action_prompts(
    action: AiAction, content: str, knowledge: Sequence[str] = ()
) -> tuple[str, str]:
    """Return ``(system_prompt, user_prompt)`` for an action."""
    role, template = _ACTION_PROMPTS[AiAction(action)]
    return build_system_prompt(role, knowledge), template.format(content=content)
