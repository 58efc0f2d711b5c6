import uuid
from contextlib import nullcontext
from typing import Any, Callable, Generic, List, Optional, Type, TypeVar

from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from hcm_skills.db import in_transaction, transaction
from hcm_skills.schemas.base import PageParams, Paginated

# Tipo genérico para modelos SQLAlchemy
ModelType = TypeVar("ModelType")
# Tipo genérico para entidades de domínio
EntityType = TypeVar("EntityType")


def new_id() -> str:
    """Identificador opaco para novos registros."""
    return str(uuid.uuid4())


def now_expression():
    """Expressão avaliada pelo banco para os campos de data de atualização."""
    return func.current_timestamp()


class BaseRepository(Generic[ModelType]):
    """
    Repositório base com operações genéricas.

    Os repositórios não guardam estado além da sessão recebida no construtor.
    Fora de um bloco ``transaction()`` cada escrita é confirmada imediatamente;
    dentro dele apenas é enviada ao banco (flush) e o commit fica a cargo do bloco.
    """

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Inicializa o repositório base.

        Args:
            model: Classe do modelo SQLAlchemy
            db: Sessão do banco de dados
        """
        self.model = model
        self.db = db

    def get(self, id: Any) -> Optional[ModelType]:
        """
        Obtém um registro pelo ID.

        Args:
            id: ID do registro

        Returns:
            Instância do modelo ou None se não encontrado
        """
        return self.db.query(self.model).filter(self.model.id == id).first()

    def delete(self, id: Any) -> bool:
        """
        Remove um registro.

        Args:
            id: ID do registro a remover

        Returns:
            True se o registro foi removido, False caso contrário
        """
        db_obj = self.get(id)
        if not db_obj:
            return False

        self.db.delete(db_obj)
        self._commit()
        return True

    def count(self) -> int:
        """
        Conta o número total de registros.

        Returns:
            Número total de registros
        """
        return self.db.query(self.model).count()

    def _unit_of_work(self):
        """Abre um bloco transaction(), ou participa do bloco já aberto pelo chamador."""
        if in_transaction(self.db):
            return nullcontext(self.db)
        return transaction(self.db)

    def _commit(self) -> None:
        if in_transaction(self.db):
            self.db.flush()
            return
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def _paginate(
        self,
        query: Query,
        params: PageParams,
        mapper: Callable[[Any], EntityType],
    ) -> Paginated[EntityType]:
        """
        Aplica a paginação a uma consulta já filtrada e ordenada.

        Args:
            query: Consulta com filtros e ordenação
            params: Página (a partir de 1) e itens por página
            mapper: Conversão de cada linha para a entidade de domínio

        Returns:
            Página com ``data`` e os metadados ``page``, ``perPage``, ``total`` e ``totalPages``
        """
        total = query.order_by(None).count()
        rows = query.offset(params.offset).limit(params.per_page).all()
        return Paginated.build([mapper(row) for row in rows], total, params)

    @staticmethod
    def _page_of(items: List[EntityType], params: PageParams) -> Paginated[EntityType]:
        """Paginação em memória, para filtros que não podem ser expressos em SQL."""
        start = params.offset
        return Paginated.build(items[start:start + params.per_page], len(items), params)
