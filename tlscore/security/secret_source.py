import binascii
import os
from typing import Tuple, Union

from tlscore.errors.error import Error, ErrorCode
from tlscore.security.secret_buffer import BytesLike, SecretBuffer, SecretCallback
from tlscore.utils.logger import log_debug, log_exception, log_service, log_warning


def static_secret(value: Union[str, BytesLike]) -> SecretCallback:
    """Callback that always provides the same key material."""
    material = value.encode("utf-8") if isinstance(value, str) else bytes(value)

    def _load(result: SecretBuffer) -> Error:
        result.append(material)
        return Error()

    return _load


def environment_secret(name: str) -> SecretCallback:
    """
    Callback that reads hex-encoded key material from the environment
    variable `name` each time it is invoked.
    """

    def _load(result: SecretBuffer) -> Error:
        encoded = os.environ.get(name)
        if not encoded:
            log_warning(f"environment variable {name} is not set", "environment_secret", service="secret")
            return Error.from_code(ErrorCode.INVALID)

        try:
            material = bytearray(binascii.unhexlify(encoded.strip()))
        except (binascii.Error, ValueError):
            log_warning(f"environment variable {name} is not valid hex", "environment_secret", service="secret")
            return Error.from_code(ErrorCode.INVALID)

        try:
            result.append(material)
        finally:
            for i in range(len(material)):
                material[i] = 0
        return Error()

    return _load


@log_service(service="secret")
def load_secret(callback: SecretCallback) -> Tuple[Error, SecretBuffer]:
    """
    Invoke `callback` against a fresh secret. A callback that raises is
    classified into an Error rather than propagated; the partially filled
    secret is wiped on any failure.
    """
    secret = SecretBuffer()
    try:
        error = callback(secret)
    except Exception as exc:
        log_exception(exc, "load_secret", service="secret")
        error = Error.from_exception(exc)

    if error:
        secret.reset()
        log_warning(f"secret provisioning failed: {error}", "load_secret", service="secret")
    else:
        log_debug(f"loaded {secret.size()} byte secret", "load_secret", service="secret")
    return error, secret
