from fastapi.security import OAuth2PasswordBearer

# Bearer token is read from the Authorization header; login issues it
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/usuarios/login")
