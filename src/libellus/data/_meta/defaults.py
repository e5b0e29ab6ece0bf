# Length of the random part of generated element identifiers
ELEMENT_ID_BYTES = 12
DATE_FORMAT = '%Y-%m-%d'
DATETIME_FORMAT = '%Y-%m-%dT%H:%M:%S.%fZ'
