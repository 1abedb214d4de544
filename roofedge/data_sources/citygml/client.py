"""
CityGML-Basis-Client für XML-Verarbeitung.

Lädt CityGML-Dateien mit lxml und wandelt sie in einen verschachtelten
Schlüssel/Wert-Baum um, wie ihn der Gebäude-Extraktor erwartet.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from lxml import etree

ID_KEY = '@gml:id'


class CityGMLBaseClient:
    """Basis-Client für CityGML XML-Verarbeitung."""

    def __init__(self, namespaces: Dict[str, str]):
        """Initialisiert den CityGML-Client.

        Args:
            namespaces: Dict[str, str] - Präfix -> Namespace-URI
        """
        self.logger = logging.getLogger(__name__)
        self.namespaces = namespaces
        self._prefixes = {uri: prefix for prefix, uri in namespaces.items()}

        self.parser = etree.XMLParser(resolve_entities=False, huge_tree=True, remove_comments=True)

    def load_citygml(self, file_path: Union[str, Path]) -> Optional[etree._Element]:
        """Lädt eine CityGML-Datei.

        Args:
            file_path: Pfad zur CityGML-Datei

        Returns:
            Root-Element oder None bei Fehler
        """
        try:
            self.logger.info(f"🔄 Lade CityGML-Datei: {file_path}")
            tree = etree.parse(str(file_path), parser=self.parser)
            return tree.getroot()
        except (OSError, etree.XMLSyntaxError) as e:
            self.logger.error(f"❌ Fehler beim Laden der CityGML-Datei: {str(e)}")
            return None

    def parse_bytes(self, data: bytes) -> etree._Element:
        """Parst CityGML aus einem Bytes-Puffer."""
        return etree.fromstring(data, parser=self.parser)

    def qualified_name(self, element: etree._Element) -> str:
        """Liefert 'präfix:lokalname' mit den konfigurierten Präfixen.

        Unbekannte Namespaces behalten das Präfix des Dokuments.
        """
        qname = etree.QName(element)
        prefix = self._prefixes.get(qname.namespace, element.prefix)
        return f"{prefix}:{qname.localname}" if prefix else qname.localname

    def element_to_tree(self, element: etree._Element) -> Union[Dict[str, Any], str]:
        """Wandelt ein Element rekursiv in einen Schlüssel/Wert-Baum um.

        Elemente ohne Kind-Elemente werden zu ihrem (getrimmten) Text.
        Mehrfach vorkommende Kinder werden zu Listen in Dokumentreihenfolge.
        Von den Attributen bleibt nur gml:id (Schlüssel '@gml:id') erhalten.

        Args:
            element: lxml-Element

        Returns:
            Dictionary oder Text des Elements
        """
        children = [child for child in element if isinstance(child.tag, str)]
        if not children:
            return (element.text or '').strip()

        node: Dict[str, Any] = {}
        gml_id = element.get(f"{{{self.namespaces.get('gml', '')}}}id")
        if gml_id:
            node[ID_KEY] = gml_id

        for child in children:
            key = self.qualified_name(child)
            value = self.element_to_tree(child)
            if key not in node:
                node[key] = value
            elif isinstance(node[key], list):
                node[key].append(value)
            else:
                node[key] = [node[key], value]
        return node

    def load_tree(self, file_path: Union[str, Path]) -> Optional[Dict[str, Any]]:
        """Lädt eine CityGML-Datei direkt als Schlüssel/Wert-Baum.

        Returns:
            Baum mit dem Root-Element als einzigem Schlüssel oder None bei Fehler
        """
        root = self.load_citygml(file_path)
        if root is None:
            return None
        return {self.qualified_name(root): self.element_to_tree(root)}

    def find_city_objects(self, tree: Dict[str, Any], model_path: List[str]) -> List[Any]:
        """Liefert die Stadtobjekt-Datensätze eines Dokuments.

        Args:
            tree: Schlüssel/Wert-Baum des Dokuments
            model_path: Schlüsselpfad zur Liste der Stadtobjekte

        Returns:
            Liste der Datensätze in Dokumentreihenfolge (leer wenn der Pfad fehlt)
        """
        node: Any = tree
        for key in model_path:
            if not isinstance(node, dict) or key not in node:
                self.logger.warning(f"⚠️ Pfadelement '{key}' nicht gefunden, keine Stadtobjekte")
                return []
            node = node[key]

        objects = node if isinstance(node, list) else [node]
        self.logger.info(f"✅ {len(objects)} Stadtobjekte gefunden")
        return objects
