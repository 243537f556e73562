class GlobalMessages:
    # Auth Messages
    INVALID_CREDENTIALS = "Invalid login credentials"
    INVALID_TOKEN = "Invalid access token"
    TOKEN_EXPIRED = "Access token has expired"
    ACCOUNT_ALREADY_EXISTS = "User already registered"
    SIGNUP_FAILED = "Could not create account"
    SESSION_FAILED = "Could not start session"
    SESSION_NOT_FOUND = "Session not found"
    SIGNOUT_FAILED = "Could not sign out"
    AUTH_SESSION_MISSING = "Auth session missing!"
    NOT_AUTHENTICATED = "Not authenticated"
    LOGOUT_SUCCESS = "Signed out successfully"

    # Profile Messages
    USER_NOT_FOUND = "User profile not found"
    PROFILE_CREATE_FAILED = "Could not create user profile"
    CLIENT_PROFILE_NOT_FOUND = "Client profile not found"
    CAREGIVER_PROFILE_NOT_FOUND = "Caregiver profile not found"

    # Booking Messages
    BOOKING_NOT_FOUND = "Booking not found"
    BOOKING_CREATED = "Service booked successfully! You'll receive a confirmation email shortly."
    ONBOARDING_COMPLETED = "Onboarding completed successfully"
