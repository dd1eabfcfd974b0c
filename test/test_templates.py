#!/usr/bin/env python3
import unittest
from zoneinfo import ZoneInfo

from circonus_proxy.circonus import Alert, AlertTime, AlertValue
from circonus_proxy.constants import DEFAULT_ALERT_TEMPLATE, DEFAULT_RECOVERY_TEMPLATE
from circonus_proxy.errors import ConfigError, RenderError
from circonus_proxy.templates import NotificationRenderer, translate_go_template

UTC = ZoneInfo("UTC")


def default_renderer(**overrides):
    options = {
        "alert_template": DEFAULT_ALERT_TEMPLATE,
        "recovery_template": DEFAULT_RECOVERY_TEMPLATE,
        "alert_color": "red",
        "recovery_color": "green",
    }
    options.update(overrides)
    return NotificationRenderer(**options)


def make_alert(recovered=False, **overrides):
    fields = {
        "id": 1,
        "severity": 1,
        "value": AlertValue("99"),
        "time": AlertTime.parse("Mon, 02 Jan 2006 15:04:05", UTC),
        "url": "http://x",
        "agent": "a",
        "check_name": "cpu",
        "metric_name": "load",
    }
    if recovered:
        fields["clear_time"] = AlertTime.parse("Mon, 02 Jan 2006 16:04:05", UTC)
        fields["clear_value"] = AlertValue("12")
    fields.update(overrides)
    return Alert(**fields)


class TestNotificationRenderer(unittest.TestCase):
    def test_alert_uses_alert_template_and_color(self):
        message, color = default_renderer().render(make_alert())
        self.assertEqual(message, "Severity 1 alert triggered by cpu (load: 99). http://x")
        self.assertEqual(color, "red")

    def test_recovery_uses_recovery_template_and_color(self):
        message, color = default_renderer().render(make_alert(recovered=True))
        self.assertEqual(message, "Recovery of cpu (load: 99). http://x")
        self.assertEqual(color, "green")

    def test_overridden_templates_and_colors(self):
        renderer = default_renderer(
            alert_template="[{{ account_name }}] #{{ id }} {{ agent }} at {{ time }}",
            recovery_template="cleared {{ clear_value }} at {{ clear_time }}",
            alert_color="Purple",
            recovery_color="gray",
        )
        message, color = renderer.render(make_alert(), account_name="acme")
        self.assertEqual(message, "[acme] #1 a at Mon, 02 Jan 2006 15:04:05")
        self.assertEqual(color, "purple")

        message, color = renderer.render(make_alert(recovered=True))
        self.assertEqual(message, "cleared 12 at Mon, 02 Jan 2006 16:04:05")
        self.assertEqual(color, "gray")

    def test_missing_field_is_render_error(self):
        renderer = default_renderer(alert_template="{{ hostname }}")
        with self.assertRaises(RenderError):
            renderer.render(make_alert())
        # o template de recuperação continua funcionando
        message, _ = renderer.render(make_alert(recovered=True))
        self.assertTrue(message.startswith("Recovery of cpu"))

    def test_execution_error_is_render_error(self):
        renderer = default_renderer(alert_template="{{ severity / 0 }}")
        with self.assertRaises(RenderError):
            renderer.render(make_alert())

    def test_invalid_template_is_config_error(self):
        with self.assertRaises(ConfigError):
            default_renderer(alert_template="{{ severity ")
        with self.assertRaises(ConfigError):
            default_renderer(recovery_template="{% if %}")

    def test_invalid_color_is_config_error(self):
        with self.assertRaises(ConfigError):
            default_renderer(alert_color="blue")
        with self.assertRaises(ConfigError):
            default_renderer(recovery_color="")


class TestGoTemplates(unittest.TestCase):
    GO_ALERT = "Severity {{.Severity}} alert triggered by {{.CheckName}} ({{.MetricName}}: {{.Value}}). {{.URL}}"
    GO_RECOVERY = "Recovery of {{.CheckName}} ({{.MetricName}}: {{.Value}}). {{.URL}}"

    def test_translation(self):
        self.assertEqual(translate_go_template(self.GO_ALERT), DEFAULT_ALERT_TEMPLATE)
        self.assertEqual(translate_go_template(self.GO_RECOVERY), DEFAULT_RECOVERY_TEMPLATE)
        self.assertEqual(translate_go_template("{{ .ClearValue }} {{.ID}}"), "{{ clear_value }} {{ id }}")

    def test_go_actions_are_not_translated(self):
        for source in ["{{if .ClearValue}}cleared{{end}}", "{{.Value.String}}", "{{.Severity | printf \"%d\"}}"]:
            with self.assertRaises(ConfigError, msg=f"source={source!r}"):
                default_renderer(alert_template=source)

    def test_go_templates_render_like_defaults(self):
        go_renderer = default_renderer(alert_template=self.GO_ALERT, recovery_template=self.GO_RECOVERY)
        renderer = default_renderer()
        for alert in (make_alert(), make_alert(recovered=True)):
            self.assertEqual(go_renderer.render(alert), renderer.render(alert))


if __name__ == '__main__':
    unittest.main()
