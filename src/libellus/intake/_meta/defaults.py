DEBUG_INTAKE = False

# Refuse submissions to forms that are not published. Storage decides by default.
INTAKE_REQUIRE_PUBLISHED = False
REQUIRED_FIELD_MESSAGE = "{label} is required"
