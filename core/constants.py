"""
Constants and configuration values for document synchronization.
"""

# Keys whose values are never translated and always copied from the
# source document (identifiers, dates, codes, cross-references)
SKIP_KEYS = frozenset({
    'id',
    'startDate',
    'endDate',
    'date',
    'level',
    'category',
    'likelihood',
    'impact',
    'type',
    'predecessorId',
    'projectAcronym',
})

# Closed enumerations that stay identical in every language variant
SKIP_VALUES = frozenset({
    'Low', 'Medium', 'High',
    'Technical', 'Social', 'Economic',
    'FS', 'SS', 'FF', 'SF',
})

# Default batching / retry parameters
DEFAULT_SYNC_PARAMS = {
    'batch_size': 30,
    'batch_delay': 2.0,     # seconds before every batch after the first
    'max_retries': 3,
    'backoff_base': 4.0,    # first retry wait, doubled on each attempt
    'backoff_max': 60.0,
    'max_batch_tokens': 0,
}

# Prefix of the opaque per-batch keys sent to the translation service
BATCH_KEY_PREFIX = 'field_'

# Display names used in translation prompts
LANGUAGE_NAMES = {
    'en': 'English',
    'si': 'Slovenian',
}

# Default translation rules, one instruction per line
TRANSLATION_RULES = {
    'en': [
        'Translate all text values to British English',
        'Keep JSON structure identical: do not add or remove keys',
        'Maintain professional EU project terminology',
        'Keep citations in original format (Author, Year)',
        'Do not translate proper nouns, organization names, or acronyms',
        'Preserve all dates in YYYY-MM-DD format',
        'Translate technical terms accurately with domain-specific vocabulary',
    ],
    'si': [
        'Translate all text values to standard Slovenian',
        'Keep JSON structure identical: do not add or remove keys',
        'Maintain professional EU project terminology',
        'Keep citations in original format (Author, Year)',
        'Do not translate proper nouns, organization names, or acronyms',
        'Preserve all dates in YYYY-MM-DD format',
        'Translate technical terms accurately with domain-specific vocabulary',
    ],
}
