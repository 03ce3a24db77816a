from typing import TypeVar, Generic, List, Optional

from synciot.db import db

T = TypeVar('T')


class BaseRepository(Generic[T]):

    def __init__(self, model_class):
        self.model_class = model_class
        self.db = db

    def create(self, obj: T, commit: bool = True) -> T:
        """Cria um novo registro"""
        self.db.session.add(obj)
        if commit:
            self.db.session.commit()
        else:
            self.db.session.flush()
        return obj

    def get_by_id(self, id: int) -> Optional[T]:
        """Busca por ID"""
        return self.db.session.get(self.model_class, id)

    def count(self, *criteria) -> int:
        return self.db.session.query(self.model_class).filter(*criteria).count()

    def update(self, obj: T) -> T:
        """Atualiza registro"""
        self.db.session.commit()
        return obj

    def delete(self, obj: T):
        """Deleta registro"""
        self.db.session.delete(obj)
        self.db.session.commit()

    def delete_by_id(self, id: int) -> bool:
        """Deleta por ID"""
        obj = self.get_by_id(id)
        if obj:
            self.delete(obj)
            return True
        return False

    def paginate(self, query, page: int, limit: int):
        """Aplica offset/limit (página 1-indexada) e retorna (itens, total)."""
        total = query.order_by(None).count()
        items = query.offset((page - 1) * limit).limit(limit).all()
        return items, total
