"""
Diagnosis assistance backed by a generative model.

The model is called over its REST API with ``requests``.  Its answer is
treated as untrusted text: code fences are stripped, the text is parsed
as JSON (falling back once to the outermost ``{...}`` span), validated
against :class:`~clinic.serializers.ai.AnalysisSchema` and normalised
into a fixed shape.  Provider failures are raised as subclasses of
:class:`AIServiceError` so the view can map them to HTTP responses.
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from datetime import datetime, timezone as dt_timezone

import requests
import structlog
from django.conf import settings

from clinic.serializers.ai import AnalysisSchema

logger = structlog.get_logger(__name__)

ANALYSIS_VERSION = '1.0'
MAX_DIAGNOSES = 5
DEFAULT_CONFIDENCE = 75

# Texts the front-end shows in empty fields; they carry no clinical data
PLACEHOLDER_SENTINELS = frozenset({
    'ai generated response will appear here...',
    'not specified',
})

SAFETY_FINISH_REASONS = frozenset({'SAFETY', 'PROHIBITED_CONTENT', 'BLOCKLIST', 'SPII'})
KEY_ERROR_REASONS = frozenset({'API_KEY_INVALID', 'API_KEY_SERVICE_BLOCKED', 'API_KEY_HTTP_REFERRER_BLOCKED'})
KEY_ERROR_STATUSES = frozenset({'UNAUTHENTICATED', 'PERMISSION_DENIED'})

VITAL_SIGN_LABELS = (
    ('temperature', 'Temperature', ' °C'),
    ('bloodPressure', 'Blood pressure', ''),
    ('heartRate', 'Heart rate', ' bpm'),
    ('weight', 'Weight', ' kg'),
    ('height', 'Height', ' cm'),
)

_FENCE_RE = re.compile(r'```(?:json)?', re.IGNORECASE)


class AIServiceError(Exception):
    """The model could not produce a usable analysis."""
    kind = 'service'


class AIConfigurationError(AIServiceError):
    kind = 'configuration'


class AIRateLimitError(AIServiceError):
    kind = 'rate_limit'


class AISafetyBlockError(AIServiceError):
    kind = 'safety'


class AnalysisParseError(AIServiceError):
    kind = 'parse'


@dataclass
class GenerativeModelClient:
    api_key: str
    model: str
    base_url: str
    timeout: int = 30

    @classmethod
    def from_settings(cls) -> 'GenerativeModelClient':
        return cls(
            api_key=settings.GOOGLE_AI_API_KEY,
            model=settings.GOOGLE_AI_MODEL,
            base_url=settings.GOOGLE_AI_BASE_URL,
            timeout=settings.GOOGLE_AI_TIMEOUT,
        )

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def generate(self, prompt: str) -> str:
        """Send ``prompt`` once and return the model's text answer."""
        if not self.api_key:
            raise AIConfigurationError('GOOGLE_AI_API_KEY is not configured')
        url = f"{self.base_url.rstrip('/')}/models/{self.model}:generateContent"
        body = {'contents': [{'role': 'user', 'parts': [{'text': prompt}]}]}
        try:
            r = requests.post(
                url,
                json=body,
                headers={'x-goog-api-key': self.api_key},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise AIServiceError(f'AI provider request failed: {exc}') from exc
        try:
            data = r.json()
        except ValueError:
            data = {}
        if r.status_code >= 400:
            raise _provider_error(r.status_code, data if isinstance(data, dict) else {})
        return _candidate_text(data)


def _provider_error(status_code: int, data: dict) -> AIServiceError:
    """Classify an error body by HTTP status, ``error.status`` and the
    ``ErrorInfo`` reasons in ``error.details``; the message is only echoed."""
    err = data.get('error') or {}
    message = err.get('message') or f'AI provider returned HTTP {status_code}'
    status = err.get('status') or ''
    reasons = {d.get('reason') for d in err.get('details') or [] if isinstance(d, dict)}
    if reasons & KEY_ERROR_REASONS or status in KEY_ERROR_STATUSES or status_code in (401, 403):
        return AIConfigurationError(message)
    if status_code == 429 or status == 'RESOURCE_EXHAUSTED':
        return AIRateLimitError(message)
    return AIServiceError(message)


def _candidate_text(data) -> str:
    if not isinstance(data, dict):
        raise AIServiceError('AI provider returned an unexpected body')
    block = (data.get('promptFeedback') or {}).get('blockReason')
    if block:
        raise AISafetyBlockError(f'prompt blocked: {block}')
    candidates = data.get('candidates') or []
    if not candidates:
        raise AIServiceError('AI provider returned no candidates')
    first = candidates[0]
    if first.get('finishReason') in SAFETY_FINISH_REASONS:
        raise AISafetyBlockError(f"response blocked: {first['finishReason']}")
    parts = (first.get('content') or {}).get('parts') or []
    text = ''.join(p.get('text', '') for p in parts if isinstance(p, dict))
    if not text.strip():
        raise AIServiceError('AI provider returned an empty answer')
    return text


# ---------------------------------------------------------------------
# Request side
# ---------------------------------------------------------------------
def _meaningful(value) -> bool:
    if value is None:
        return False
    text = str(value).strip()
    return bool(text) and text.lower() not in PLACEHOLDER_SENTINELS


def has_sufficient_data(data: dict) -> bool:
    """True when any of symptoms, exam details, vitals or notes has content."""
    vitals = data.get('vitalSigns') or {}
    return (
        _meaningful(data.get('symptoms'))
        or _meaningful(data.get('checkupDetails'))
        or any(_meaningful(v) for v in vitals.values())
        or _meaningful(data.get('doctorNotes'))
    )


def build_prompt(data: dict) -> str:
    patient = data.get('patientInfo') or {}
    lines = [
        'You assist a doctor by reviewing a patient case. Use only the data below.',
        '',
        'PATIENT',
        f"- Age: {patient.get('age') or 'unknown'}",
        f"- Gender: {patient.get('gender') or 'unknown'}",
        f"- Medical history: {patient.get('medicalHistory') or 'none recorded'}",
        '',
        'CLINICAL DATA',
    ]
    if _meaningful(data.get('symptoms')):
        lines.append(f"- Symptoms: {data['symptoms'].strip()}")
    vitals = data.get('vitalSigns') or {}
    for key, label, unit in VITAL_SIGN_LABELS:
        if _meaningful(vitals.get(key)):
            lines.append(f"- {label}: {str(vitals[key]).strip()}{unit}")
    if _meaningful(data.get('checkupDetails')):
        lines.append(f"- Examination findings: {data['checkupDetails'].strip()}")
    if _meaningful(data.get('doctorNotes')):
        lines.append(f"- Doctor's assessment: {data['doctorNotes'].strip()}")
    lines += [
        '',
        'Answer with a single JSON object and nothing else, with keys:',
        '"possibleDiagnoses" (array of up to 5 strings), "recommendedActions" (string),',
        '"riskFactors" (array of strings), "followUpRecommendations" (string),',
        '"confidence" (number 0-100), "confidenceExplanation" (string),',
        '"additionalConsiderations" (string).',
        'Do not give medication dosages or a definitive diagnosis.',
    ]
    return '\n'.join(lines)


# ---------------------------------------------------------------------
# Response side
# ---------------------------------------------------------------------
def extract_json_object(text: str) -> dict:
    cleaned = _FENCE_RE.sub('', text or '').strip()
    try:
        obj = json.loads(cleaned)
    except ValueError:
        start, end = cleaned.find('{'), cleaned.rfind('}')
        if start == -1 or end <= start:
            raise AnalysisParseError('no JSON object in model answer')
        try:
            obj = json.loads(cleaned[start:end + 1])
        except ValueError as exc:
            raise AnalysisParseError(f'model answer is not valid JSON: {exc}') from exc
    if not isinstance(obj, dict):
        raise AnalysisParseError('model answer is not a JSON object')
    return obj


def _clamp_confidence(raw) -> float | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        raw = raw.strip().rstrip('%').strip()
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if value != value:  # NaN
        return None
    value = max(0.0, min(100.0, value))
    return int(value) if value.is_integer() else round(value, 1)


def _metadata(model: str) -> dict:
    return {
        'analyzedAt': datetime.now(dt_timezone.utc).isoformat(),
        'aiModel': model,
        'analysisVersion': ANALYSIS_VERSION,
    }


TEXT_KEYS = ('recommendedActions', 'followUpRecommendations', 'confidenceExplanation', 'additionalConsiderations')
LIST_KEYS = ('possibleDiagnoses', 'riskFactors')
# keys the model uses when it returns diagnoses as objects
_ITEM_LABEL_KEYS = ('name', 'diagnosis', 'condition', 'title', 'description')


def _as_item(value) -> str:
    if isinstance(value, dict):
        for key in _ITEM_LABEL_KEYS:
            if isinstance(value.get(key), str) and value[key].strip():
                return value[key]
        return json.dumps(value, ensure_ascii=False)
    return '' if value is None else str(value)


def _as_text(value):
    if value is None:
        return ''
    if isinstance(value, (list, tuple)):
        return '; '.join(t.strip() for t in map(_as_item, value) if t.strip())
    if isinstance(value, dict):
        return _as_item(value)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def coerce_answer(obj: dict) -> dict:
    """Bring common off-shape answers (lists for prose, objects for list
    items, a bare string for a list) into the validated shape."""
    out = dict(obj)
    for key in TEXT_KEYS:
        if key in out:
            out[key] = _as_text(out[key])
    for key in LIST_KEYS:
        value = out.get(key)
        if isinstance(value, str):
            out[key] = [value]
        elif isinstance(value, (list, tuple)):
            out[key] = [_as_item(v) for v in value]
    return out


def normalize_analysis(obj: dict, model: str) -> dict:
    schema = AnalysisSchema(data=coerce_answer(obj))
    if not schema.is_valid():
        raise AnalysisParseError(f'model answer failed validation: {dict(schema.errors)}')
    vd = schema.validated_data
    diagnoses = [d.strip() for d in vd['possibleDiagnoses'] if d and d.strip()][:MAX_DIAGNOSES]
    if not diagnoses:
        raise AnalysisParseError('model answer has no diagnoses')
    explanation = vd['confidenceExplanation']
    confidence = _clamp_confidence(vd['confidence'])
    if confidence is None:
        confidence = DEFAULT_CONFIDENCE
        explanation = 'Confidence level adjusted due to parsing issues'
    return {
        'possibleDiagnoses': diagnoses,
        'recommendedActions': vd['recommendedActions'],
        'riskFactors': [r.strip() for r in vd['riskFactors'] if r and r.strip()],
        'followUpRecommendations': vd['followUpRecommendations'],
        'confidence': confidence,
        'confidenceExplanation': explanation,
        'additionalConsiderations': vd['additionalConsiderations'],
        **_metadata(model),
    }


def parse_analysis(text: str, model: str) -> dict:
    return normalize_analysis(extract_json_object(text), model)


def fallback_analysis(model: str) -> dict:
    """Safe, renderable body used when no analysis could be produced."""
    return {
        'possibleDiagnoses': ['AI analysis unavailable - manual review required'],
        'recommendedActions': 'Proceed with standard clinical assessment.',
        'riskFactors': [],
        'followUpRecommendations': 'Follow standard clinical protocols for this presentation.',
        'confidence': 0,
        'confidenceExplanation': 'No AI analysis available; human review required.',
        'additionalConsiderations': 'Rely on clinical judgment.',
        **_metadata(model),
    }


def analyze_checkup(data: dict, client: GenerativeModelClient) -> dict:
    text = client.generate(build_prompt(data))
    try:
        return parse_analysis(text, client.model)
    except AnalysisParseError:
        logger.warning('ai_answer_unparseable', model=client.model, answer_chars=len(text))
        raise
