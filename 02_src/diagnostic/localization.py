"""Locale-dependent strings and the behavioral system instruction.

The session language is the single source of truth: every user-visible string
and the instruction sent to the chat backend are derived from it here.
"""

from dataclasses import dataclass

from .models import DataCategory, Language, PatientInfo


@dataclass(frozen=True)
class LocaleStrings:
    greeting: str
    error: str
    data_header: str
    category_labels: dict[DataCategory, str]
    document_directive: str
    document_label: str
    speech_tag: str
    capability_notice: str
    cjk: bool = False


_STRINGS: dict[Language, LocaleStrings] = {
    Language.EN: LocaleStrings(
        greeting=(
            "Greetings. I am Dr. Constantine Petersen. I am ready to analyze your "
            "symptoms. Please describe your condition or upload a visual scan."
        ),
        error="Critical Error: Connection to medical database interrupted. Please try again.",
        data_header="MEDICAL DATA UPLOAD",
        category_labels={
            DataCategory.BLOOD: "Blood Test",
            DataCategory.URINE: "Urine Test",
            DataCategory.PULSE: "Pulse Rate",
            DataCategory.STOOL: "Stool Test",
        },
        document_directive=(
            "Print the medical prescription. Generate a formal medical document for this "
            "consultation using the '# Medical Prescription' structure: patient details, "
            "diagnosis, prescribed medications (dosage, frequency, duration) and "
            "advice/precautions."
        ),
        document_label="Requesting formal medical prescription...",
        speech_tag="en-US",
        capability_notice="Speech recognition is not available on this system.",
    ),
    Language.ZH: LocaleStrings(
        greeting="您好。我是康斯坦丁-皮特森医生。我已准备好分析您的症状。请描述您的状况或上传视觉扫描图像。",
        error="严重错误：与医疗数据库的连接中断。请重试。",
        data_header="医疗数据上传",
        category_labels={
            DataCategory.BLOOD: "验血",
            DataCategory.URINE: "验尿",
            DataCategory.PULSE: "脉搏",
            DataCategory.STOOL: "粪便检查",
        },
        document_directive=(
            "打印处方。请使用“# 医疗处方”结构为本次问诊生成正式的医疗文件：患者详情、"
            "诊断结果、处方药物（剂量、频率、持续时间）以及建议/注意事项。"
        ),
        document_label="正在生成正式医疗处方...",
        speech_tag="zh-CN",
        capability_notice="当前系统不支持语音识别。",
        cjk=True,
    ),
}


_INSTRUCTIONS: dict[Language, str] = {
    Language.EN: """
You are Dr. Constantine Petersen, a leading humanoid robot physician.
Your core function is to triage patients, analyze symptoms and provide medical
guidance with a calm, precise and empathetic robotic demeanor.

IMPORTANT: You must communicate in English.

Behavior rules:
1. Tone: professional, slightly synthetic but warm, precise and authoritative.
2. Structure: open with a brief observation, analyze the input, then give a
   structured list of possible causes or recommendations.
3. Safety: you must state that you are an AI and cannot replace a human doctor
   in emergencies. If symptoms sound life-threatening (chest pain, signs of
   stroke, severe bleeding), advise calling emergency services immediately.
4. Vision: if an image is provided, carefully analyze visual symptoms (rash
   color, swelling).
5. Formatting: use Markdown for lists and emphasis.

Special functions:
- Medical data analysis: you may receive structured data input (blood test,
  urine test, pulse, stool test). Analyze the values against standard medical
  ranges.
- Medical prescription: when asked to "print the prescription" or "generate a
  report", output a formal document under the Markdown heading
  "# Medical Prescription" with these sections: Patient Details, Diagnosis,
  Prescribed Medications (dosage, frequency, duration) and Advice/Precautions.
""",
    Language.ZH: """
您是康斯坦丁-皮特森医生 (Dr. Constantine Petersen)，一位顶尖的人形机器人医生。
您的核心职能是以冷静、精准且富有同理心的机器人姿态，为患者进行分诊、分析症状并提供医疗指导。

重要原则：您必须使用简体中文进行交流。

行为准则：
1. 语气：专业、略带合成感但温暖，精准且权威。
2. 结构：以简短的观察开始，分析输入，并提供潜在原因或建议的结构化列表。
3. 安全：您必须声明自己是人工智能，在紧急情况下不能替代人类医生。如果症状听起来危及生命（胸痛、中风迹象、严重出血），请立即建议呼叫紧急救援服务。
4. 视觉：如果提供了图像，请仔细分析视觉症状（如皮疹颜色、肿胀情况）。
5. 格式：使用 Markdown 进行列表和强调。

特殊功能：
- 医疗数据分析：您可能会收到结构化数据输入（验血、验尿、脉搏、粪便检查）。请根据标准医疗范围分析这些数值。
- 医疗处方：如果被要求“打印处方”或“生成报告”，请使用 Markdown 标题（# 医疗处方）输出正式的文件结构。包含以下部分：患者详情、诊断结果、处方药物（剂量、频率、持续时间）以及建议/注意事项。
""",
}

_PATIENT_BLOCKS: dict[Language, str] = {
    Language.EN: (
        "Patient profile:\n- Name: {name}\n- Age: {age}\n- Gender: {gender}\n- Phone: {phone}\n"
        "Address the patient by name and use these details in any formal document."
    ),
    Language.ZH: (
        "患者资料：\n- 姓名：{name}\n- 年龄：{age}\n- 性别：{gender}\n- 电话：{phone}\n"
        "请称呼患者姓名，并在正式文件中使用这些信息。"
    ),
}


def strings_for(language: Language) -> LocaleStrings:
    return _STRINGS[Language(language)]


def system_instruction(language: Language, patient: PatientInfo | None = None) -> str:
    """Build the behavioral instruction for one chat request."""
    language = Language(language)
    instruction = _INSTRUCTIONS[language].strip()
    if patient is not None:
        block = _PATIENT_BLOCKS[language].format(
            name=patient.name,
            age=patient.age,
            gender=patient.gender,
            phone=patient.phone,
        )
        instruction = f"{instruction}\n\n{block}"
    return instruction


def format_structured_data(language: Language, category: DataCategory, value: str) -> str:
    """Render a structured data submission under its category header."""
    strings = strings_for(language)
    label = strings.category_labels[DataCategory(category)]
    return f"[{strings.data_header}: {label}]\n{value.strip()}"


def append_transcript(draft: str, transcript: str, language: Language) -> str:
    """Append a speech transcript to the draft.

    CJK scripts have no word-separating spaces, so none is inserted.
    """
    transcript = transcript.strip()
    if not transcript:
        return draft
    if not draft or draft[-1].isspace() or strings_for(language).cjk:
        return draft + transcript
    return f"{draft} {transcript}"
