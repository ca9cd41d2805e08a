from drf_spectacular.extensions import OpenApiAuthenticationExtension


class BearerTokenAuthenticationScheme(OpenApiAuthenticationExtension):
    target_class = "sm_core.iam.auth.BearerTokenAuthentication"
    name = "BearerJWT"

    def get_security_definition(self, auto_schema):
        return {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
            "description": (
                "Send the token from /v1/auth/login (no tenant) or "
                "/v1/auth/select-tenant (tenant-scoped) as `Authorization: Bearer <token>`."
            ),
        }
