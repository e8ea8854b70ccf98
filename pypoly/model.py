"""
Polynomial regression with a statistics-style interface.

Wraps the least-squares fitter with named coefficients, inference and a
printable summary.
"""

import numpy as np
import pandas as pd
from typing import Optional, Union
from scipy import stats

from ._backends import BackendBase, get_backend
from ._core import horner_eval, solve_normal_equations
from ._utils import as_float_array
from .poly import _check_distinct, _prepare_samples


def _term_names(x_name: str, degree: int) -> list:
    """Term labels, highest degree first: ['x^2', 'x', 'Intercept']."""
    names = []
    for power in range(degree, -1, -1):
        if power == 0:
            names.append('Intercept')
        elif power == 1:
            names.append(x_name)
        else:
            names.append(f'{x_name}^{power}')
    return names


class PolynomialModel:
    """
    Fit a polynomial regression model.

    Examples
    --------
    >>> import pandas as pd
    >>> from pypoly import polymodel
    >>>
    >>> data = pd.DataFrame({'t': [0, 1, 2, 3, 4], 'v': [3, 5, 7, 9, 11]})
    >>> model = polymodel(y='v', degree=1, x='t', data=data)
    >>>
    >>> model.summary()      # Coefficient table
    >>> model.coef           # Named coefficients
    >>> model.predict([5])   # Predictions via Horner evaluation
    """

    def __init__(
        self,
        y: Union[str, np.ndarray],
        degree: int,
        x: Optional[Union[str, np.ndarray]] = None,
        data: Optional[pd.DataFrame] = None,
        backend: Union[str, BackendBase] = 'auto',
        use_fp64: Optional[bool] = None,
        require_distinct: bool = True,
    ):
        """
        Fit polynomial regression model.

        Parameters
        ----------
        y : str or array
            Response variable
            - If string: column name in data
            - If array: numeric values
        degree : int
            Polynomial degree
        x : str or array, optional
            Predictor. Omit for uniformly spaced samples 0..n-1.
        data : DataFrame, optional
            Dataset containing the named columns
        backend : str or BackendBase
            Matrix-inversion backend: 'auto', 'cpu', 'reference', 'gpu', ...
        use_fp64 : bool, optional
            Precision preference
        require_distinct : bool
            Reject repeated x values as a singular system
        """
        if isinstance(y, str):
            if data is None:
                raise ValueError("Must provide data when y is a string")
            y_values = data[y].values
            self.y_name = y
        else:
            y_values = y
            self.y_name = 'y'

        if isinstance(x, str):
            if data is None:
                raise ValueError("Must provide data when x is a string")
            x_values = data[x].values
            self.x_name = x
        else:
            x_values = x
            self.x_name = 'x'

        self.x_values, self.y_values, self.degree = _prepare_samples(
            x_values, y_values, degree
        )
        if x_values is not None and require_distinct:
            _check_distinct(self.x_values)

        self.n_obs = self.y_values.shape[0]
        self.n_coef = self.degree + 1
        self.var_names = _term_names(self.x_name, self.degree)

        self.backend = get_backend(backend, use_fp64=use_fp64)
        self._result = solve_normal_equations(
            self.x_values, self.y_values, self.degree, backend=self.backend
        )

        self._compute_statistics()

    def _compute_statistics(self):
        """Compute residuals, standard errors, t-stats, p-values, R²."""
        result = self._result

        self.coefficients = result.coef
        self.rcond = result.rcond
        self.fitted_values = horner_eval(self.coefficients, self.x_values)
        self.residuals = self.y_values - self.fitted_values
        self.df_residual = self.n_obs - self.n_coef

        rss = float(np.sum(self.residuals**2))

        # Var(β) = σ² (X'X)⁻¹, undefined for an exact interpolant
        if self.df_residual > 0:
            self.sigma = np.sqrt(rss / self.df_residual)
            self.vcov = result.normal_inverse * (self.sigma ** 2)
            self.std_errors = np.sqrt(np.abs(np.diag(self.vcov)))
            with np.errstate(divide='ignore', invalid='ignore'):
                self.t_values = self.coefficients / self.std_errors
            self.pvalues = 2 * (1 - stats.t.cdf(np.abs(self.t_values), self.df_residual))
        else:
            self.sigma = np.nan
            self.vcov = np.full((self.n_coef, self.n_coef), np.nan)
            self.std_errors = np.full(self.n_coef, np.nan)
            self.t_values = np.full(self.n_coef, np.nan)
            self.pvalues = np.full(self.n_coef, np.nan)

        tss = float(np.sum((self.y_values - np.mean(self.y_values))**2))
        self.r_squared = 1 - (rss / tss) if tss > 0 else 0.0

        if self.df_residual > 0:
            self.adj_r_squared = 1 - (1 - self.r_squared) * (self.n_obs - 1) / self.df_residual
        else:
            self.adj_r_squared = np.nan

    @property
    def coef(self):
        """Named coefficients (pandas Series), highest degree first."""
        return pd.Series(self.coefficients, index=self.var_names)

    def conf_int(self, alpha: float = 0.05):
        """
        Confidence intervals for coefficients.

        Parameters
        ----------
        alpha : float
            Significance level (default: 0.05 for 95% CI)

        Returns
        -------
        DataFrame
            Confidence intervals with columns 'lower' and 'upper'
        """
        if self.df_residual > 0:
            t_crit = stats.t.ppf(1 - alpha/2, self.df_residual)
        else:
            t_crit = np.nan
        lower = self.coefficients - t_crit * self.std_errors
        upper = self.coefficients + t_crit * self.std_errors

        return pd.DataFrame({
            'lower': lower,
            'upper': upper
        }, index=self.var_names)

    def predict(self, newdata: Union[pd.DataFrame, pd.Series, np.ndarray, list]) -> np.ndarray:
        """
        Predict response for new predictor values.

        Parameters
        ----------
        newdata : DataFrame, Series or array-like
            - If DataFrame: must have a column named like the predictor
            - Otherwise: predictor values of any shape

        Returns
        -------
        array
            Predicted values, shaped like the input
        """
        if isinstance(newdata, pd.DataFrame):
            x_new = newdata[self.x_name].values
        else:
            x_new = newdata
        return horner_eval(self.coefficients, as_float_array(x_new, name='newdata',
                                                             allow_scalar=True))

    def summary(self):
        """Print summary of the fit (coefficient table and fit statistics)."""
        print()
        print("="*80)
        print(f"POLYNOMIAL REGRESSION RESULTS (degree {self.degree})")
        print("="*80)
        print()

        print(f"Dependent variable: {self.y_name}")
        print(f"Number of observations: {self.n_obs}")
        print(f"Degrees of freedom: {self.df_residual} (residual), {self.degree} (model)")
        print()

        print("Coefficients:")
        print("-"*80)
        print(f"{'Term':<20} {'Estimate':>12} {'Std. Error':>12} {'t value':>10} {'Pr(>|t|)':>12}")
        print("-"*80)

        for i, name in enumerate(self.var_names):
            p = self.pvalues[i]
            if np.isnan(p):
                sig = ''
                p_str = 'NA'
            else:
                if p < 0.001:
                    sig = ' ***'
                elif p < 0.01:
                    sig = ' **'
                elif p < 0.05:
                    sig = ' *'
                elif p < 0.1:
                    sig = ' .'
                else:
                    sig = ''

                p_str = f"{p:.4f}" if p >= 0.0001 else "<.0001"

            print(f"{name:<20} {self.coefficients[i]:>12.4f} {self.std_errors[i]:>12.4f} "
                  f"{self.t_values[i]:>10.3f} {p_str:>12}{sig}")

        print("-"*80)
        print("Signif. codes:  0 '***' 0.001 '**' 0.01 '*' 0.05 '.' 0.1 ' ' 1")
        print()

        print(f"Residual standard error: {self.sigma:.4f} on {self.df_residual} degrees of freedom")
        print(f"Multiple R-squared:      {self.r_squared:.4f}")
        print(f"Adjusted R-squared:      {self.adj_r_squared:.4f}")
        print(f"Normal matrix rcond:     {self.rcond:.3e}")

        print()
        print(f"Backend: {self.backend.name}")
        print("="*80)
        print()

    def __repr__(self):
        return f"PolynomialModel(n={self.n_obs}, degree={self.degree}, R²={self.r_squared:.3f})"


def polymodel(y, degree, x=None, data=None, **kwargs):
    """
    Fit polynomial regression model (convenience function).

    Parameters
    ----------
    y : str or array
        Response variable
    degree : int
        Polynomial degree
    x : str or array, optional
        Predictor (uniform 0..n-1 when omitted)
    data : DataFrame, optional
        Dataset
    **kwargs
        Additional arguments passed to PolynomialModel

    Returns
    -------
    PolynomialModel
        Fitted model object

    Examples
    --------
    >>> model = polymodel(y='v', degree=2, x='t', data=df)
    >>> model.summary()
    >>> model.coef
    >>> model.predict(pd.DataFrame({'t': [5.0, 6.0]}))
    """
    return PolynomialModel(y=y, degree=degree, x=x, data=data, **kwargs)
