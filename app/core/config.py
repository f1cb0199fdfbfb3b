import os
from dotenv import load_dotenv

load_dotenv()

# ============================================
# DATABASE
# ============================================
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./volunteer_leader.db")

# ============================================
# AUTH TOGGLE CONFIGURATION
# ============================================
# To DISABLE auth: Set DISABLE_AUTH=true in .env (every request runs as admin@local.dev)
# To ENABLE auth:  Set DISABLE_AUTH=false in .env
# ============================================
DISABLE_AUTH = os.getenv("DISABLE_AUTH", "false").lower() == "true"

# JWT
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "CHANGE_THIS_TO_A_SECURE_RANDOM_STRING_IN_PRODUCTION")
JWT_ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("JWT_ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))  # 24 hours default
REFRESH_TOKEN_EXPIRE_DAYS = int(os.getenv("JWT_REFRESH_TOKEN_EXPIRE_DAYS", "7"))

# Supabase fallback (optional)
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY")

# HTTP
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
