"""
Procurement AI Pipeline

AI-mediated structured extraction for procurement: drafts RFPs from free
text, extracts structured proposals from vendor emails, and compares
proposals into a ranked, explained recommendation.
"""

__version__ = '0.1.0'

# Re-export key classes for convenience
from .pipeline import (
    ProcurementPipeline,
    RfpSynthesizer,
    ProposalExtractor,
    ProposalComparator,
    VendorIndex,
)
from .gateway import ModelGateway
from .config import Settings, get_settings
from .repository import RecordStore
from .models import (
    ComparisonResult,
    LineItem,
    ProposalExtract,
    ProposalLineItem,
    RfpDraft,
    VendorEvaluation,
    VendorProposal,
)
from .parsing import find_missing_fields, normalize_response
from .logging import (
    configure_logging,
    get_logger,
    logging_context,
    pipeline_call,
    PipelineTimer,
)
from .errors import (
    ProcurementAIError,
    ConfigurationError,
    InvalidInput,
    InsufficientInput,
    RecordNotFound,
    FailureKind,
    ModelError,
    ModelUnavailable,
    ModelTimeout,
    MalformedResponse,
    PipelineError,
    GenerationFailed,
    ComparisonFailed,
)

__all__ = [
    # Version
    '__version__',
    # Main Pipeline
    'ProcurementPipeline',
    # Components
    'RfpSynthesizer',
    'ProposalExtractor',
    'ProposalComparator',
    'VendorIndex',
    'ModelGateway',
    'RecordStore',
    # Config
    'Settings',
    'get_settings',
    # Models
    'ComparisonResult',
    'LineItem',
    'ProposalExtract',
    'ProposalLineItem',
    'RfpDraft',
    'VendorEvaluation',
    'VendorProposal',
    # Parsing
    'find_missing_fields',
    'normalize_response',
    # Logging
    'configure_logging',
    'get_logger',
    'logging_context',
    'pipeline_call',
    'PipelineTimer',
    # Errors
    'ProcurementAIError',
    'ConfigurationError',
    'InvalidInput',
    'InsufficientInput',
    'RecordNotFound',
    'FailureKind',
    'ModelError',
    'ModelUnavailable',
    'ModelTimeout',
    'MalformedResponse',
    'PipelineError',
    'GenerationFailed',
    'ComparisonFailed',
]
