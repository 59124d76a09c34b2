VALIDATION = "validation"
QUOTA = "quota"
CONFIGURATION = "configuration"
NOT_FOUND = "not_found"


def accepted(**payload):
    return {"ok": True, **payload}


def rejected(error, kind=VALIDATION, budget_exceeded=False):
    return {
        "ok": False,
        "error": error,
        "kind": kind,
        "budget_exceeded": budget_exceeded,
    }


def normalize_identity(value):
    return normalize_text(value).lower()


def normalize_text(value):
    if value is None:
        return ""
    return str(value).strip()


def candidate_key(name, gender):
    return (normalize_identity(name), normalize_identity(gender))
