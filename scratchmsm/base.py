from sklearn.base import BaseEstimator as SklearnBaseEstimator
from sklearn.utils.validation import check_is_fitted


class BaseEstimator(SklearnBaseEstimator):
    # Hyperparameters are the constructor arguments. Fitted quantities carry
    # a trailing underscore and are only created by fit().

    def summarize(self):
        """Return some diagnostic summary statistics about this Markov model"""
        return 'NotImplemented'

    def _check_fitted(self, *attributes):
        check_is_fitted(self, list(attributes) or None)
