"""
Firestore en memoria para las pruebas

Implementa solo lo que usa services.firebase_service: colecciones,
documentos con id automático, where(filter=FieldFilter), order_by,
limit, stream, count() e Increment en update().
"""

import copy
import uuid
from datetime import datetime

from google.cloud.firestore_v1.transforms import Increment


def _tipo(valor):
    """Grupo de tipo de Firestore: bool no es número y int equivale a float."""
    if isinstance(valor, bool):
        return bool
    if isinstance(valor, (int, float)):
        return float
    if isinstance(valor, datetime):
        return datetime
    return type(valor)


def _iguales(valor, esperado):
    return _tipo(valor) is _tipo(esperado) and valor == esperado


def _comparar(valor, operador, esperado):
    if operador == '==':
        return _iguales(valor, esperado)
    if operador == '!=':
        return not _iguales(valor, esperado)
    if operador == 'in':
        return any(_iguales(valor, e) for e in esperado)
    if operador == 'array-contains':
        return any(_iguales(v, esperado) for v in (valor or []))
    if operador not in ('<', '<=', '>', '>='):
        raise NotImplementedError(f'Operador no soportado: {operador}')
    if _tipo(valor) is not _tipo(esperado):
        # Firestore solo ordena valores del mismo tipo
        return False
    try:
        if operador == '<':
            return valor < esperado
        if operador == '<=':
            return valor <= esperado
        if operador == '>':
            return valor > esperado
        return valor >= esperado
    except TypeError:
        return False


class FakeSnapshot:
    def __init__(self, doc_id, datos):
        self.id = doc_id
        self._datos = datos

    @property
    def exists(self):
        return self._datos is not None

    def to_dict(self):
        return copy.deepcopy(self._datos) if self._datos is not None else None


class FakeAggregation:
    def __init__(self, value):
        self.value = value


class FakeDocument:
    def __init__(self, coleccion, doc_id):
        self._coleccion = coleccion
        self.id = doc_id

    def get(self):
        return FakeSnapshot(self.id, self._coleccion.docs.get(self.id))

    def set(self, datos):
        self._coleccion.docs[self.id] = copy.deepcopy(datos)

    def update(self, cambios):
        if self.id not in self._coleccion.docs:
            raise KeyError(f'No existe el documento {self.id}')
        actual = self._coleccion.docs[self.id]
        for campo, valor in cambios.items():
            if isinstance(valor, Increment):
                actual[campo] = (actual.get(campo) or 0) + valor.value
            else:
                actual[campo] = copy.deepcopy(valor)

    def delete(self):
        self._coleccion.docs.pop(self.id, None)


class FakeQuery:
    def __init__(self, coleccion, filtros=None, orden=None, limite=None):
        self._coleccion = coleccion
        self._filtros = filtros or []
        self._orden = orden
        self._limite = limite

    def where(self, filter=None):
        filtro = (filter.field_path, filter.op_string, filter.value)
        return FakeQuery(self._coleccion, self._filtros + [filtro], self._orden, self._limite)

    def order_by(self, campo, direction='ASCENDING'):
        return FakeQuery(self._coleccion, self._filtros, (campo, direction == 'DESCENDING'), self._limite)

    def limit(self, cantidad):
        return FakeQuery(self._coleccion, self._filtros, self._orden, cantidad)

    def _resultados(self):
        docs = [
            (doc_id, datos) for doc_id, datos in self._coleccion.docs.items()
            if all(
                campo in datos and _comparar(datos[campo], operador, valor)
                for campo, operador, valor in self._filtros
            )
        ]
        if self._orden:
            campo, descendente = self._orden
            # Firestore omite los documentos sin el campo de orden
            docs = [d for d in docs if campo in d[1]]
            docs.sort(key=lambda d: d[1][campo], reverse=descendente)
        if self._limite:
            docs = docs[:self._limite]
        return docs

    def stream(self):
        for doc_id, datos in self._resultados():
            yield FakeSnapshot(doc_id, datos)

    def count(self):
        query = self

        class _Conteo:
            def get(self):
                return [[FakeAggregation(len(query._resultados()))]]

        return _Conteo()


class FakeCollection(FakeQuery):
    def __init__(self, nombre):
        self.nombre = nombre
        self.docs = {}
        super().__init__(self)

    def document(self, doc_id=None):
        return FakeDocument(self, doc_id or uuid.uuid4().hex[:20])


class FakeFirestore:
    """Cliente con colecciones creadas al primer uso."""

    def __init__(self):
        self._colecciones = {}

    def collection(self, nombre):
        if nombre not in self._colecciones:
            self._colecciones[nombre] = FakeCollection(nombre)
        return self._colecciones[nombre]

    def sembrar(self, nombre, doc_id, datos):
        """Guarda un documento directamente, sin pasar por el servicio."""
        self.collection(nombre).docs[str(doc_id)] = copy.deepcopy(datos)
        return {**datos, 'id': str(doc_id)}

    def documento(self, nombre, doc_id):
        datos = self.collection(nombre).docs.get(str(doc_id))
        return copy.deepcopy(datos) if datos is not None else None

    def todos(self, nombre):
        return [{**copy.deepcopy(d), 'id': i} for i, d in self.collection(nombre).docs.items()]
