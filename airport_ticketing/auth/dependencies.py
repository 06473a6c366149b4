import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from airport_ticketing.config import settings

bearer_scheme = HTTPBearer(auto_error=False)

def get_current_employee_id(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme)
) -> int:
    """Employee id from the token issued by the authentication service.
    
    The token is trusted once its signature checks out; no credential
    verification happens here.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise credentials_exception
    
    try:
        payload = jwt.decode(credentials.credentials, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.PyJWTError:
        raise credentials_exception
    
    employee_id = payload.get("employee_id")
    if isinstance(employee_id, bool) or not isinstance(employee_id, int):
        raise credentials_exception
    
    return employee_id
