"""TF-IDF document vectors for content-based recommendations.

Each product document is its title followed by its tags. Vectors are built
fresh from the current corpus on every call; nothing is persisted.

Weights follow the classic definitions:
    tf(t, d)  = count(t, d) / len(d)
    idf(t)    = ln(N / df(t))
    w(t, d)   = tf(t, d) * idf(t)
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

import numpy as np
from scipy.sparse import csr_matrix, diags
from sklearn.feature_extraction.text import CountVectorizer

from src.recommender.models import Product
from src.recommender.text import tokenize

# Configure module logger
logger = logging.getLogger(__name__)


@dataclass
class DocumentVector:
    """Sparse TF-IDF vector for one product."""

    product_id: str
    vector: Dict[str, float] = field(default_factory=dict)
    magnitude: float = 0.0


@dataclass
class TfidfMatrix:
    """TF-IDF weights of a whole corpus.

    Attributes:
        product_ids: Product ID of each row, in corpus order.
        matrix: Sparse (n_products, n_terms) weight matrix.
        vocabulary: Term of each column.
    """

    product_ids: List[str]
    matrix: csr_matrix
    vocabulary: np.ndarray

    def row_index(self, product_id: str) -> int:
        """Row of a product, -1 if it is not in the corpus."""
        try:
            return self.product_ids.index(product_id)
        except ValueError:
            return -1


def vector_magnitude(vector: Dict[str, float]) -> float:
    """Euclidean norm of a sparse vector (0.0 when empty)."""
    if not vector:
        return 0.0
    return float(np.sqrt(sum(value * value for value in vector.values())))


def build_tfidf_matrix(products: Sequence[Product]) -> TfidfMatrix:
    """Build the TF-IDF weight matrix of a product corpus.

    A CountVectorizer with the shared tokenizer produces the document-term
    counts; term frequency and inverse document frequency are applied with
    sparse matrix arithmetic. Terms present in every document keep a zero
    weight.

    Args:
        products: Full product corpus snapshot.

    Returns:
        TfidfMatrix with one row per product. A corpus without any tokens
        yields a matrix with no columns.
    """
    product_ids = [product.id for product in products]
    documents = [product.document_text for product in products]

    # CountVectorizer refuses a corpus with an empty vocabulary
    if not any(tokenize(doc) for doc in documents):
        logger.debug("Corpus has no tokens, returning an empty matrix")
        return TfidfMatrix(
            product_ids=product_ids,
            matrix=csr_matrix((len(products), 0), dtype=np.float64),
            vocabulary=np.array([], dtype=object),
        )

    vectorizer = CountVectorizer(
        tokenizer=tokenize,
        lowercase=False,
        token_pattern=None,
    )
    counts = csr_matrix(vectorizer.fit_transform(documents), dtype=np.float64)
    n_docs = counts.shape[0]

    # Term frequency: each row divided by its token count
    doc_lengths = np.asarray(counts.sum(axis=1)).ravel()
    inv_lengths = np.divide(
        1.0, doc_lengths, out=np.zeros_like(doc_lengths), where=doc_lengths > 0
    )

    # Inverse document frequency over the whole corpus
    doc_freq = np.bincount(counts.indices, minlength=counts.shape[1])
    idf = np.log(n_docs / doc_freq)

    weights = csr_matrix(diags(inv_lengths) @ counts)
    weights.sort_indices()
    # Scaled in place so zero-idf terms remain as explicit zeros
    weights.data *= idf[weights.indices]

    logger.info(
        "Built TF-IDF matrix",
        extra={
            "num_products": n_docs,
            "vocabulary_size": counts.shape[1],
        },
    )

    return TfidfMatrix(
        product_ids=product_ids,
        matrix=weights,
        vocabulary=vectorizer.get_feature_names_out(),
    )


def build_product_vectors(products: Sequence[Product]) -> Dict[str, DocumentVector]:
    """Build per-product TF-IDF vectors as term -> weight mappings.

    Args:
        products: Full product corpus snapshot.

    Returns:
        Mapping of product ID to its DocumentVector. Products whose document
        has no tokens get an empty vector with zero magnitude.
    """
    if not products:
        return {}

    tfidf = build_tfidf_matrix(products)
    weights = tfidf.matrix

    vectors: Dict[str, DocumentVector] = {}
    for row, product_id in enumerate(tfidf.product_ids):
        start, end = weights.indptr[row], weights.indptr[row + 1]
        # Explicit zeros are kept, so zero-idf terms stay in the vector
        vector = {
            str(tfidf.vocabulary[j]): float(value)
            for j, value in zip(weights.indices[start:end], weights.data[start:end])
        }
        vectors[product_id] = DocumentVector(
            product_id=product_id,
            vector=vector,
            magnitude=vector_magnitude(vector),
        )

    return vectors
