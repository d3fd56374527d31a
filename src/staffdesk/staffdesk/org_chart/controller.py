from __future__ import annotations

from flask import Flask, jsonify

from ..common.serialization import to_json, to_json_list
from ..container import Container
from ..web.guards import current_principal, json_body, login_required
from .model import OrgChartBranch


def branch_json(branch: OrgChartBranch) -> dict:
    data = to_json(branch.node)
    data["children"] = [branch_json(child) for child in branch.children]
    return data


def register(app: Flask, container: Container) -> None:
    service = container.org_chart_service

    @app.route("/api/org-chart", methods=["GET"], endpoint="list_org_chart")
    @login_required
    def list_org_chart():
        return jsonify(to_json_list(service.list_nodes(current_principal())))

    @app.route("/api/org-chart/tree", methods=["GET"], endpoint="org_chart_tree")
    @login_required
    def org_chart_tree():
        return jsonify([branch_json(b) for b in service.tree(current_principal())])

    @app.route("/api/org-chart/<int:node_id>", methods=["GET"], endpoint="get_org_chart_node")
    @login_required
    def get_org_chart_node(node_id: int):
        return jsonify(to_json(service.get_node(current_principal(), node_id)))

    @app.route("/api/org-chart", methods=["POST"], endpoint="create_org_chart_node")
    @login_required
    def create_org_chart_node():
        return jsonify(to_json(service.create_node(current_principal(), json_body()))), 201

    @app.route("/api/org-chart/<int:node_id>", methods=["PUT"], endpoint="update_org_chart_node")
    @login_required
    def update_org_chart_node(node_id: int):
        return jsonify(to_json(service.update_node(current_principal(), node_id, json_body())))

    @app.route("/api/org-chart/<int:node_id>", methods=["DELETE"], endpoint="delete_org_chart_node")
    @login_required
    def delete_org_chart_node(node_id: int):
        service.delete_node(current_principal(), node_id)
        return "", 204
