# init_db.py
from app.db.session import engine, SessionLocal
from app.db.base import Base

# IMPORTANTE: Importar todos os modelos aqui para que o SQLAlchemy
# saiba que eles existem antes de criar as tabelas
from app.models.exam import Exam
from app.models.deadline import Deadline, DeadlineItem, DeadlineCategory
from app.models.reminder import Reminder
from app.models.subscription import PushSubscription
from app.services.categories import seed_defaults


def init_db():
    print("Conectando ao banco de dados...")
    print("Criando tabelas...")

    # Cria todas as tabelas definidas nos modelos importados acima
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        created = seed_defaults(db)
        if created:
            print(f"{created} categorias padrão criadas.")
    finally:
        db.close()

    print("Tabelas criadas com sucesso!")

if __name__ == "__main__":
    init_db()
