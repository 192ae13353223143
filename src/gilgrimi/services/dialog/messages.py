"""
Dialog Messages

All user-facing Korean text of the counseling dialog.

CLINICAL_REVIEW_REQUIRED: Wording of questions and referrals
must be reviewed by counselors before deployment.
"""

WELCOME_TEXT = (
    "안녕하세요. 청소년 자살예방을 위한 챗봇 길그리미입니다.\n"
    "상담을 시작하기에 앞서 상담과정에서 필요하다면 전화 혹은 문자 연결이 있을 수도 있어요. "
    "동의해주실수 있나요?"
)

WARNING_TEXT = (
    "혹시 지금 당장 자살 충동을 느껴서 즉각적인 도움이 필요하다면 "
    "언제든지 '도와주세요'라고 입력해주세요"
)

PRIORITY_DANGER_TEXT = "지금바로 청소년긴급상담센터로 연결해드리겠습니다. 잠시만 기다려주세요."

# Get agreement
AGREEMENT_THANKS = "고마워요. 그럼 이제부터 상담을 진행할게요."
ASK_NAME_PROMPT = "친구의이름은 뭔가요?"
CONSENT_DECLINED_TEXT = "동의해주시지 않으면 더 이상 상담 진행이 어려워요:( 다시 시작해주세요."

# Ask feeling
GREETING_TEMPLATE = "안녕하세요, {name}. 반가워요."
ASK_FEELING_PROMPT = "요즘 기분은 어때요?"
ASK_NAME_REPROMPT = "이름을 알려주면 더 편하게 이야기할 수 있을 것 같아요. 친구의이름은 뭔가요?"

# Suicidal thinking
NEGATIVE_FEELING_TEXT = "그랬군요. 많이 힘들었겠어요."
NEGATIVE_FEELING_PROMPT = "최근에 그 감정들 때문에 죽고 싶었던 적은 없었나요?"
POSITIVE_FEELING_TEXT = "기분이 좋아보여서 다행이에요:)"
POSITIVE_FEELING_PROMPT = "그래도 혹시 최근에 죽고 싶었던 적은 없었나요?"
FEELING_REPROMPT = "제가 잘 이해하지 못했어요. 요즘 기분이 어떤지 조금 더 이야기해줄 수 있나요?"

# Relationship
SUICIDAL_THOUGHTS_TEXT = "솔직하게 이야기해줘서 고마워요. 그런 마음이 들 만큼 힘들었군요."
NO_SUICIDAL_THOUGHTS_TEXT = "그렇군요. 이야기해줘서 고마워요."
RELATIONSHIP_PROMPT = "요즘 주변 사람들과의 관계는 어때요? 혼자라고 느껴질 때가 있나요?"
NO_HELP_NEEDED_TEXT = (
    "지금은 특별한 도움이 필요하지 않은 것 같아요. "
    "언제든 이야기하고 싶을 때 다시 찾아와 주세요."
)
YES_NO_REPROMPT = "제가 잘 이해하지 못했어요. '응' 또는 '아니'로 대답해줄 수 있나요?"

# Frequency of feeling
ALONE_TEXT = "혼자라고 느끼면 정말 외로웠겠어요."
CONNECTED_TEXT = "곁에 있어주는 사람들이 있다니 다행이에요."
FREQUENCY_PROMPT = "죽고 싶다는 생각은 얼마나 자주 드나요? (전혀 / 가끔 / 자주 / 항상)"
RELATIONSHIP_REPROMPT = "제가 잘 이해하지 못했어요. 요즘 주변 사람들과 지내는 건 어떤지 다시 말해줄 수 있나요?"

# Try suicide
FREQUENCY_ACK_TEXT = "알려줘서 고마워요."
TRY_SUICIDE_PROMPT = "혹시 실제로 자살을 시도하거나 구체적으로 계획해 본 적이 있나요?"
FREQUENCY_REPROMPT = "'전혀', '가끔', '자주', '항상' 중에서 골라서 대답해줄 수 있나요?"

# Plan suicide
PLAN_REFERRAL_TEXT = (
    "말해줘서 정말 고마워요. 지금 친구의 안전이 가장 중요해요. "
    "지금바로 청소년긴급상담센터로 연결해드리겠습니다. 잠시만 기다려주세요."
)
NO_PLAN_TEXT = "그렇군요. 대답해줘서 고마워요."
BEFORE_RESULT_PROMPT = "마지막으로, 지금도 죽고 싶다는 생각이 드나요?"

# Result
HIGH_RISK_TEXT = (
    "지금 많이 힘든 상태인 것 같아요. 혼자 견디지 말고 전문 상담 선생님과 꼭 이야기해 보세요. "
    "청소년긴급상담센터로 연결해드릴게요."
)
LOW_RISK_TEXT = (
    "이야기해줘서 고마워요. 지금은 위험한 상태는 아닌 것 같아요. "
    "힘든 일이 생기면 언제든지 다시 찾아와 주세요."
)

# Errors and limits
INVALID_STATE_TEXT = "죄송해요, 상담 중에 문제가 생겼어요. 처음부터 다시 시작해주세요."
RETRY_LIMIT_TEXT = (
    "대화를 잘 이어가지 못해서 미안해요. 상담 선생님과 직접 이야기해 보는 건 어떨까요? "
    "다시 시작하고 싶으면 아무 말이나 입력해주세요."
)

ACTIVITY_DETECTED_TEMPLATE = "{activity_type} activity detected"
