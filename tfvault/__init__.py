## terraform-credentials-vault: Terraform credentials helper backed by HashiCorp Vault

__version__ = "0.1.0"

# Filled in by the release build.
GIT_COMMIT = ""
PRE_RELEASE = "dev"


def version_string():
    version = f"v{__version__}"
    if PRE_RELEASE:
        version += f"-{PRE_RELEASE}"
    if GIT_COMMIT:
        version += f" ({GIT_COMMIT})"
    return f"terraform-credentials-vault {version}"
