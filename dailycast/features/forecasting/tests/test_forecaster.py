"""Tests for the autoregressive forecaster."""

import math
from datetime import date, timedelta

import numpy as np
import pytest

from dailycast.core.exceptions import PredictionFailure
from dailycast.features.forecasting.forecaster import (
    AutoregressiveForecaster,
    PredictorProtocol,
    one_step_predictions,
)


class TestForecast:
    """Tests for recursive multi-step forecasting."""

    def test_increment_model(self, increment_model):
        """Test f(x) = x + 1 from seed 0 gives 1..5."""
        forecaster = AutoregressiveForecaster(increment_model, series="sales")

        result = forecaster.forecast(0.0, 5)

        assert result.values == [1.0, 2.0, 3.0, 4.0, 5.0]
        assert result.horizon == 5
        assert result.seed == 0.0
        assert result.series == "sales"

    def test_each_step_fed_previous_output(self, increment_model):
        """Test step i+1 receives the output of step i, not ground truth."""
        forecaster = AutoregressiveForecaster(increment_model)

        forecaster.forecast(10.0, 3)

        assert increment_model.calls == [[10.0], [11.0], [12.0]]

    def test_mean_model(self, mean_model_factory):
        """Test a constant-mean model repeats the mean."""
        forecaster = AutoregressiveForecaster(mean_model_factory(11.5))

        result = forecaster.forecast(10.0, 3)

        assert result.values == pytest.approx([11.5, 11.5, 11.5])

    @pytest.mark.parametrize("horizon", [0, -1])
    def test_invalid_horizon(self, increment_model, horizon):
        """Test horizons below 1 are rejected."""
        forecaster = AutoregressiveForecaster(increment_model)

        with pytest.raises(ValueError, match="horizon"):
            forecaster.forecast(1.0, horizon)

    def test_horizon_one(self, increment_model):
        """Test a single step forecast."""
        result = AutoregressiveForecaster(increment_model).forecast(4.0, 1)

        assert result.values == [5.0]

    def test_failure_reports_step_index(self, failing_model_factory):
        """Test the failing step, series and input are reported."""
        forecaster = AutoregressiveForecaster(failing_model_factory(2.5), series="min")

        with pytest.raises(PredictionFailure) as exc_info:
            forecaster.forecast(0.0, 5)

        # inputs: 0, 1, 2, 3 -> step 3 is the first input above 2.5
        assert exc_info.value.step_index == 3
        assert exc_info.value.series == "min"
        assert exc_info.value.input_value == 3.0
        assert exc_info.value.code == "PREDICTION_FAILURE"

    def test_non_finite_output_fails(self, mean_model_factory):
        """Test NaN model output is not passed on."""
        forecaster = AutoregressiveForecaster(mean_model_factory(math.nan))

        with pytest.raises(PredictionFailure) as exc_info:
            forecaster.forecast(1.0, 3)

        assert exc_info.value.step_index == 0

    def test_undated_by_default(self, increment_model):
        """Test lag1 forecasts carry no dates unless a start date is given."""
        assert AutoregressiveForecaster(increment_model).forecast(1.0, 2).dates is None

    def test_dates_from_start_date(self, increment_model):
        """Test dates advance one day per step."""
        result = AutoregressiveForecaster(increment_model).forecast(
            1.0, 3, start_date=date(2024, 12, 31)
        )

        assert result.dates == [date(2024, 12, 31), date(2025, 1, 1), date(2025, 1, 2)]

    def test_calendar_features(self, increment_model):
        """Test calendar mode feeds month and day of each predicted date."""
        forecaster = AutoregressiveForecaster(increment_model, feature_mode="lag1_calendar")

        forecaster.forecast(5.0, 2, start_date=date(2024, 2, 28))

        assert increment_model.calls == [[5.0, 2.0, 28.0], [6.0, 2.0, 29.0]]

    def test_calendar_defaults_to_tomorrow(self, increment_model):
        """Test calendar mode starts at tomorrow without a start date."""
        forecaster = AutoregressiveForecaster(increment_model, feature_mode="lag1_calendar")

        result = forecaster.forecast(5.0, 1)

        assert result.dates == [date.today() + timedelta(days=1)]

    def test_deterministic(self, increment_model):
        """Test identical calls give identical sequences."""
        forecaster = AutoregressiveForecaster(increment_model)

        assert forecaster.forecast(3.0, 4).values == forecaster.forecast(3.0, 4).values

    def test_models_satisfy_protocol(self, increment_model):
        """Test any object with predict is a predictor."""
        assert isinstance(increment_model, PredictorProtocol)


class TestOneStepPredictions:
    """Tests for non-recursive one-step predictions."""

    def test_uses_actual_previous_values(self, increment_model):
        """Test each prediction uses the previous actual value."""
        predictions = one_step_predictions(increment_model, [10.0, 20.0, 15.0])

        np.testing.assert_array_equal(predictions, [11.0, 21.0])

    def test_single_value_gives_no_predictions(self, increment_model):
        """Test a one-element history yields no predictions."""
        assert len(one_step_predictions(increment_model, [10.0])) == 0

    def test_calendar_uses_predicted_day(self, increment_model):
        """Test calendar features come from the day being predicted."""
        dates = [date(2024, 5, 1), date(2024, 5, 2)]

        one_step_predictions(increment_model, [1.0, 2.0], dates=dates, feature_mode="lag1_calendar")

        assert increment_model.calls == [[1.0, 5.0, 2.0]]

    def test_dates_length_mismatch(self, increment_model):
        """Test dates must align with values."""
        with pytest.raises(ValueError, match="same length"):
            one_step_predictions(increment_model, [1.0, 2.0], dates=[date(2024, 1, 1)])

    def test_failure_index_is_predicted_position(self, failing_model_factory):
        """Test the failure step is the position of the predicted value."""
        with pytest.raises(PredictionFailure) as exc_info:
            one_step_predictions(failing_model_factory(5.0), [1.0, 2.0, 9.0, 3.0])

        assert exc_info.value.step_index == 3
