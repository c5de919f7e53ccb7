class AppStatusCode:
    # -- SUCCESS
    DATA_RETRIEVED_SUCCESSFULLY = "100"
    CREATED_SUCCESSFULLY = "101"
    UPDATED_SUCCESSFULLY = "102"
    DELETED_SUCCESSFULLY = "103"

    # -- GENERIC FAILURES
    OPERATION_FAILED = "200"
    OPERATION_ERROR = "201"
    STORAGE_ERROR = "202"

    # -- VALIDATION
    INVALID_INPUT = "300"
    REQUIRED_VALIDATION_ERROR = "301"
    INVALID_REFERENCE = "302"

    # -- NOT FOUND / CONFLICT
    RECORD_NOT_FOUND = "400"
    DUPLICATE_ADD_ERROR = "401"
    USER_USERNAME_IS_UNIQUE = "402"
    UNIQUE_CODE_ALREADY_EXISTS = "403"
    ASSET_ALREADY_HAS_CODE = "404"

    # -- AUTHENTICATION
    AUTHENTICATION_TOKEN_MISSING = "500"
    AUTHENTICATION_TOKEN_INVALID = "501"
    AUTHENTICATION_TOKEN_EXPIRED = "502"
    AUTHENTICATION_SESSION_TIMEOUT = "503"
    AUTHENTICATION_USER_INVALID = "504"
    AUTHENTICATION_USER_INACTIVE = "505"
    AUTHENTICATION_CREDENTIALS_INVALID = "506"

    # -- AUTHORIZATION
    AUTHENTICATION_UNAUTHORIZED_ACCESS = "600"
    ROLE_NOT_ALLOWED = "601"
    SELF_ROLE_CHANGE_FORBIDDEN = "602"
