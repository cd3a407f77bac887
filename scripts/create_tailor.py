import argparse
import sys
import os
from sqlmodel import Session, select

# Add current directory to path
sys.path.append(os.getcwd())

from tailorbook.core.config import get_settings
from tailorbook.core.security import get_password_hash
from tailorbook.db.session import init_db, make_engine, open_ssh_tunnel
from tailorbook.models.user import User, UserRole


def create_tailor(email: str, password: str, name: str):
    print("--- Tailor Account Creation ---")

    settings = get_settings()
    tunnel = open_ssh_tunnel(settings) if settings.USE_SSH else None
    engine = make_engine(settings, tunnel)
    init_db(engine)

    try:
        with Session(engine) as session:
            # Check if user already exists
            user = session.exec(select(User).where(User.email == email)).first()
            if user:
                print(f"User with email {email} already exists.")
                return

            print(f"Creating tailor {email}...")
            db_user = User(
                email=email,
                password=get_password_hash(password),
                name=name,
                role=UserRole.TAILOR,
            )
            session.add(db_user)
            session.commit()
            print("Tailor created successfully!")
            print(f"Email: {email}")
            print(f"Id: {db_user.id}")
    finally:
        engine.dispose()
        if tunnel is not None:
            tunnel.stop()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create a tailor account")
    parser.add_argument("email")
    parser.add_argument("password")
    parser.add_argument("--name", default="Tailor")
    args = parser.parse_args()
    create_tailor(args.email, args.password, args.name)
