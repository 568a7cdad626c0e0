# src/services/exceptions.py

# --- General Exceptions ---
class UserNotFoundError(Exception):
    """사용자를 찾을 수 없을 때"""
    pass

class RecipeNotFoundError(Exception):
    """레시피를 찾을 수 없을 때"""
    pass

class CommentNotFoundError(Exception):
    """댓글을 찾을 수 없을 때"""
    pass

class IngredientNotFoundError(Exception):
    """재료를 찾을 수 없을 때"""
    pass

# --- Creation/Validation Exceptions ---
class UserCreationError(Exception):
    """사용자 생성 실패 시 (이메일 중복 등)"""
    pass

class RecipeAlreadyExistsError(Exception):
    """레시피 제목(titre)이 이미 존재할 때"""
    pass

class IngredientAlreadyExistsError(Exception):
    """재료 이름이 이미 존재할 때"""
    pass

class CommentAlreadyExistsError(Exception):
    """같은 작성자가 같은 레시피에 이미 댓글을 남겼을 때"""
    pass

class PasswordMismatchError(Exception):
    """비밀번호 확인 값이 일치하지 않거나 기존 비밀번호가 틀렸을 때"""
    pass

class ImageValidationError(Exception):
    """업로드 이미지의 형식이나 크기가 허용되지 않을 때"""
    pass

class SlugGenerationError(Exception):
    """충돌하지 않는 슬러그를 만들지 못했을 때"""
    pass

# --- Authorization Exceptions ---
class PermissionDeniedError(Exception):
    """작성자가 아닌 사용자가 수정/삭제를 시도할 때"""
    pass

# --- Auth Exceptions ---
class TokenInvalidError(Exception):
    """토큰이 유효하지 않거나 만료되었을 때"""
    pass

class AuthenticationError(Exception):
    """사용자 자격 증명 실패 시"""
    pass
