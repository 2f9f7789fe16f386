"""
Interview Engine Module
Backend-agnostic interviews over declarative question trees
"""

from .response_path import (
    ResponsePath,
    SELECTED_VARIANT_KEY,
    SELECTED_VARIANTS_KEY
)

from .responses import (
    ValueKind,
    ResponseValue,
    DefaultMode,
    DefaultValue,
    Responses
)

from .models import (
    QuestionKind,
    Unit,
    InputQuestion,
    MultilineQuestion,
    MaskedQuestion,
    IntQuestion,
    FloatQuestion,
    ConfirmQuestion,
    ListElementKind,
    ListQuestion,
    AllOfQuestion,
    OneOfQuestion,
    AnyOfQuestion,
    Variant,
    Question,
    SurveyDefinition
)

from .errors import (
    SurveyError,
    SurveyCancelled,
    BackendError,
    MissingResponse,
    ValidationExhausted,
    ValidationError,
    ResponseError,
    MissingPath,
    TypeMismatch,
    InvalidVariant
)

from .interview_engine import (
    AskRequest,
    InterviewBackend,
    InterviewEngine,
    Validator,
    accept_all,
    collect
)

from .reconstruct import (
    SelectedVariant,
    reconstruct
)

from .derive import (
    survey,
    one_of,
    ask,
    SurveySchema,
    SurveyBuilder,
    schema_for,
    builder
)

from .config import (
    InterviewConfig,
    load_config
)

__all__ = [
    # Paths and responses
    'ResponsePath',
    'SELECTED_VARIANT_KEY',
    'SELECTED_VARIANTS_KEY',
    'ValueKind',
    'ResponseValue',
    'DefaultMode',
    'DefaultValue',
    'Responses',
    # Question tree
    'QuestionKind',
    'Unit',
    'InputQuestion',
    'MultilineQuestion',
    'MaskedQuestion',
    'IntQuestion',
    'FloatQuestion',
    'ConfirmQuestion',
    'ListElementKind',
    'ListQuestion',
    'AllOfQuestion',
    'OneOfQuestion',
    'AnyOfQuestion',
    'Variant',
    'Question',
    'SurveyDefinition',
    # Errors
    'SurveyError',
    'SurveyCancelled',
    'BackendError',
    'MissingResponse',
    'ValidationExhausted',
    'ValidationError',
    'ResponseError',
    'MissingPath',
    'TypeMismatch',
    'InvalidVariant',
    # Engine
    'AskRequest',
    'InterviewBackend',
    'InterviewEngine',
    'Validator',
    'accept_all',
    'collect',
    # Reconstruction
    'SelectedVariant',
    'reconstruct',
    # Derivation
    'survey',
    'one_of',
    'ask',
    'SurveySchema',
    'SurveyBuilder',
    'schema_for',
    'builder',
    # Config
    'InterviewConfig',
    'load_config'
]
