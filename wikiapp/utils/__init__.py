"""
Utils package for the wiki application.

This package contains all utility functions and helper classes.
"""
from .file_utils import (
    as_valid_filename,
    parse_tags,
    join_tags,
    space_delimit_tags,
    zip_files_flat,
    zip_directory
)
from .response_utils import (
    create_text_download_response,
    create_zip_download_response,
    redirect_to
)
from .crypto_utils import (
    password_context,
    hash_password,
    verify_password,
    generate_random_password,
    generate_session_id
)
from .validation_utils import (
    GENERAL_ERROR_KEY,
    bind_form,
    add_model_error,
    validation_errors_to_dict
)
